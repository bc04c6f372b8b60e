"""
Tests for episode title chain propagation
"""
import threading

import pytest

from showmatch.models import EpisodeOption, EpisodeRow
from showmatch.propagation import EpisodeTable, index_of_title, propagate, select_title


def row(show_key, *titles, chosen=0):
    return EpisodeRow(show_key, tuple(EpisodeOption(t, f"{show_key}:{t}") for t in titles), chosen)


@pytest.fixture
def chips_rows():
    """ep18 {Cry Wolf, Crash Diet}, ep19 {Crash Diet, Rainy Day}, ep20 {Rainy Day, Crack-Up}"""
    return [
        row("chips", "Cry Wolf", "Crash Diet"),
        row("chips", "Crash Diet", "Rainy Day"),
        row("chips", "Rainy Day", "Crack-Up"),
    ]


def test_chain_propagation(chips_rows):
    chips_rows[0].chosen_index = 1  # caller selected "Crash Diet" on ep18

    changed = propagate(chips_rows, 0, "Crash Diet")

    assert changed == [1, 2]
    assert chips_rows[1].chosen.title == "Rainy Day"
    assert chips_rows[2].chosen.title == "Crack-Up"


def test_propagation_is_idempotent(chips_rows):
    chips_rows[0].chosen_index = 1
    propagate(chips_rows, 0, "Crash Diet")

    assert propagate(chips_rows, 0, "Crash Diet") == []


def test_propagation_never_touches_options(chips_rows):
    before = [r.options for r in chips_rows]
    chips_rows[0].chosen_index = 1

    propagate(chips_rows, 0, "Crash Diet")

    assert [r.options for r in chips_rows] == before


def test_reselecting_propagates_back(chips_rows):
    chips_rows[0].chosen_index = 1
    propagate(chips_rows, 0, "Crash Diet")

    # user switches ep20 back to "Rainy Day"
    changed = select_title(chips_rows, 2, "Rainy Day")

    assert changed == [2, 1, 0]
    assert [r.chosen.title for r in chips_rows] == ["Cry Wolf", "Crash Diet", "Rainy Day"]


def test_propagation_terminates_on_cycle():
    rows = [
        row("show", "A", "B", chosen=0),
        row("show", "B", "A", chosen=1),
        row("show", "A", "B", chosen=0),
    ]

    changed = propagate(rows, 0, "A")

    assert changed == [1, 2]
    assert len(set(changed)) == len(changed)
    assert rows[1].chosen.title == "B"
    assert rows[2].chosen.title == "B"


def test_propagation_long_chain_does_not_recurse():
    titles = [f"T{i}" for i in range(1501)]
    rows = [row("long", titles[i], titles[i + 1]) for i in range(1500)]
    rows[0].chosen_index = 1

    changed = propagate(rows, 0, "T1")

    assert changed == list(range(1, 1500))
    assert all(r.chosen_index == 1 for r in rows)


def test_cross_show_isolation():
    rows = [
        row("show-a", "Pilot", "Origins", chosen=1),
        row("show-b", "Pilot", "Beginnings", chosen=0),
        row("show-a", "Pilot", "Homecoming", chosen=0),
    ]

    changed = propagate(rows, 0, "Origins")

    assert changed == []
    changed = propagate(rows, 0, "Pilot")
    assert changed == [2]
    assert rows[1].chosen_index == 0


def test_only_two_option_rows_participate():
    rows = [
        row("s", "A", "B", chosen=0),
        row("s", "A"),
        row("s", "A", "C", "D"),
        row("s", "A", "E"),
    ]

    changed = propagate(rows, 0, "A")

    assert changed == [3]
    assert rows[1].chosen_index == 0
    assert rows[2].chosen_index == 0


def test_depth_first_order():
    rows = [
        row("s", "X", "A", chosen=1),
        row("s", "A", "B"),
        row("s", "A", "C"),
        row("s", "B", "D"),
    ]

    changed = propagate(rows, 0, "A")

    # row 1 flips to B, its chain (row 3) is followed before row 2
    assert changed == [1, 3, 2]


@pytest.mark.parametrize("source_index", [-1, 3, 100])
def test_out_of_range_source_is_noop(chips_rows, source_index, caplog):
    changed = propagate(chips_rows, source_index, "Crash Diet")

    assert changed == []
    assert [r.chosen_index for r in chips_rows] == [0, 0, 0]
    assert "out of range" in caplog.text


def test_unknown_title_changes_nothing(chips_rows):
    assert propagate(chips_rows, 0, "Not A Title") == []
    assert select_title(chips_rows, 0, "Not A Title") == []


def test_empty_rows():
    assert propagate([], 0, "A") == []


def test_index_of_title():
    r = row("s", "Cry Wolf", "Crash Diet")

    assert index_of_title(r, "Crash Diet") == 1
    assert index_of_title(r, "crash diet") == -1
    assert index_of_title(r, None) == -1


def test_select_title_includes_source_when_changed(chips_rows):
    changed = select_title(chips_rows, 0, "Crash Diet")

    assert changed == [0, 1, 2]
    assert select_title(chips_rows, 0, "Crash Diet") == []


def test_episode_table_select(chips_rows):
    table = EpisodeTable(chips_rows)

    changed = table.select(0, "Crash Diet")

    assert changed == [0, 1, 2]
    assert table.chosen_titles() == ["Crash Diet", "Rainy Day", "Crack-Up"]
    assert len(table) == 3


def test_episode_table_preselect_cascades(chips_rows):
    table = EpisodeTable(chips_rows)

    changed = table.preselect(0, "Crash Diet")

    assert changed == [0, 1, 2]


def test_episode_table_preselect_without_confident_pick(chips_rows):
    table = EpisodeTable(chips_rows)

    assert table.preselect(0, "Something else entirely") == []
    assert table.preselect(0, None) == []
    assert table.preselect(9, "Crash Diet") == []


def test_episode_table_append():
    table = EpisodeTable()

    index = table.append(row("s", "A", "B"))

    assert index == 0
    assert table[0].options[1].title == "B"


def test_episode_table_serializes_concurrent_selections():
    rows = [row("s", f"T{i}", f"T{i + 1}") for i in range(200)]
    table = EpisodeTable(rows)
    barrier = threading.Barrier(4)
    results = []

    def work():
        barrier.wait()
        results.append(table.select(0, "T1"))

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    # exactly one writer performs the whole cascade, the others find it settled
    assert sorted(len(r) for r in results) == [0, 0, 0, 200]
    assert table.chosen_titles() == [f"T{i + 1}" for i in range(200)]


def test_episode_table_rows_snapshot(chips_rows):
    table = EpisodeTable(chips_rows)
    before = table.rows()

    table.select(0, "Crash Diet")
    after = table.rows()

    assert [r.chosen_index for r in before] == [0, 0, 0]
    assert [r.chosen_index for r in after] == [1, 1, 1]
    assert after[1].show_key == chips_rows[1].show_key
    assert after[0] is not table[0]
