import pytest

from minitcsh.history import EventNotFound, History


@pytest.fixture
def history():
    hist = History()
    hist.add("ls -l")
    hist.add("echo hi")
    hist.add("ls -a")
    return hist


def test_add_ignores_empty_lines():
    hist = History()
    hist.add("")
    hist.add(None)
    assert len(hist) == 0


def test_iteration_keeps_order(history):
    assert list(history) == ["ls -l", "echo hi", "ls -a"]
    assert len(history) == 3


def test_entry_is_one_based(history):
    assert history.entry(1) == "ls -l"
    assert history.entry(3) == "ls -a"
    assert history.entry(0) is None
    assert history.entry(4) is None


def test_clear(history):
    history.clear()
    assert len(history) == 0
    assert history.entry(1) is None


def test_plain_line_unchanged(history):
    assert history.expand_line("  pwd") == "  pwd"


def test_bang_bang_gives_last(history):
    assert history.expand_line("!!") == "ls -a"
    assert history.expand_line("  !!  ") == "ls -a"


def test_bang_number(history):
    assert history.expand_line("!2") == "echo hi"
    assert history.expand_line("!1 ") == "ls -l"


def test_bang_number_out_of_range(history):
    with pytest.raises(EventNotFound):
        history.expand_line("!9")
    with pytest.raises(EventNotFound):
        history.expand_line("!0")


def test_bang_number_with_trailing_text(history):
    assert history.resolve_bang("!2x", 0) is None


def test_bang_prefix_picks_most_recent(history):
    assert history.expand_line("!ls") == "ls -a"
    assert history.expand_line("!ec") == "echo hi"


def test_bang_prefix_with_extra_word_fails(history):
    assert history.resolve_bang("!ls extra", 0) is None


def test_unknown_prefix_message(history):
    with pytest.raises(EventNotFound) as info:
        history.expand_line("!zz")
    assert str(info.value) == "zz: event not found"


def test_lone_bang_message(history):
    with pytest.raises(EventNotFound) as info:
        history.expand_line("!")
    assert str(info.value) == "history: event not found"


def test_bang_bang_on_empty_history():
    hist = History()
    assert hist.resolve_bang("!!", 0) is None
    with pytest.raises(EventNotFound):
        hist.expand_line("!!")


def test_expansion_round_trip(history):
    for number, line in enumerate(history, start=1):
        assert history.expand_line(f"!{number}") == line