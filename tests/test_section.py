from control_parser import extract_section, extract_topic_description


def test_extract_topic_description():
    body = b"<!-- test title -->\nTopic Description\n-------\n\ncontent\ncontent\n\nPackage(s) Affected\n"
    assert extract_topic_description(body) == b"content\ncontent\n"


def test_extract_topic_description_two_lines():
    body = (
        b"...Topic Description\n-----\n\nbody line 1\nbody line 2\n\n"
        b"Package(s) Affected\n- zsync\n"
    )
    assert extract_topic_description(body) == b"body line 1\nbody line 2\n"


def test_trailing_blank_lines_stay_in_span():
    body = b"Topic Description\n---\n\ntext\n\n\n\nPackage(s) Affected"
    assert extract_topic_description(body) == b"text\n\n\n"


def test_crlf_body():
    body = (
        b"Topic Description\r\n-----\r\n\r\nline one\r\nline two\r\n\r\n"
        b"Package(s) Affected\r\n"
    )
    assert extract_topic_description(body) == b"line one\r\nline two\r\n\r"


def test_leading_indent_of_first_line_is_consumed():
    body = b"Topic Description\n---\n\n  indented\n\nPackage(s) Affected"
    assert extract_topic_description(body) == b"indented\n"


def test_end_marker_before_start_marker():
    body = b"Package(s) Affected\n\nTopic Description\n---\n\ntext\n"
    assert extract_topic_description(body) is None


def test_missing_markers():
    assert extract_topic_description(b"") is None
    assert extract_topic_description(b"text\n\nPackage(s) Affected\n") is None
    assert extract_topic_description(b"Topic Description\n---\n\ntext\n") is None
    assert extract_topic_description(b"Topic Description\n\ntext\n\nPackage(s) Affected\n") is None


def test_truncated_underline():
    assert extract_topic_description(b"Topic Description\n---") is None
    assert extract_topic_description(b"Topic Description\n---\nPackage(s) Affected") is None


def test_custom_markers():
    data = b"Intro\n===\n\nhello\nOutro\n"
    assert extract_section(data, b"Intro", b"=", b"Outro") == b"hello"
