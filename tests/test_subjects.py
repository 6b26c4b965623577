from subjects import core_subjects, get_subjects_list, subject_name, subject_options


def test_class_10_subjects():
    ids = [s.id for s in get_subjects_list("10")]
    assert ids[:2] == ["math", "science"]
    assert [s.id for s in core_subjects(get_subjects_list("10"))] == ["math", "science"]


def test_missing_class_level_defaults_to_10():
    assert get_subjects_list(None) == get_subjects_list("10")


def test_stream_ignored_below_senior_classes():
    assert get_subjects_list("9", "commerce") == get_subjects_list("9")


def test_senior_streams():
    assert [s.id for s in core_subjects(get_subjects_list("11", "science"))] == [
        "physics", "chemistry", "math", "biology",
    ]
    assert [s.id for s in core_subjects(get_subjects_list("12", "Commerce"))] == [
        "accounts", "business", "math",
    ]
    assert [s.id for s in core_subjects(get_subjects_list("12", "arts"))] == ["history", "polity"]


def test_senior_without_stream_gets_science():
    assert get_subjects_list("12") == get_subjects_list("12", "science")


def test_catalog_is_deterministic():
    assert get_subjects_list("11", "arts") == get_subjects_list("11", "arts")


def test_subject_name_lookup():
    assert subject_name("current_affairs", "10") == "Current Affairs"
    assert subject_name("self_analysis", "10") == "Self Analysis"
    assert subject_name("math", "10") == "Mathematics"
    assert subject_name("accounts", "12", "commerce") == "Accountancy"
    assert subject_name("unknown", "10") == "unknown"


def test_subject_options_include_extras():
    ids = [s.id for s in subject_options("10")]
    assert ids[-2:] == ["revision", "extra"]
