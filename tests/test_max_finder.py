import pytest

from txtproc.max_finder import (
    GlobalMaxResult,
    MaxFinderError,
    find_global_max,
    find_global_max_from_analysis_result,
)


def _entry(name, profile, diff):
    return [
        f"File: {name}\n",
        f"Profile with maximum angle difference: {profile}\n",
        f"Angle difference: {diff:.6f}\n",
        "Min angle: 1.000000 (bin 3)\n",
        "\n",
    ]


ANALYSIS = (
    ["Maximum Angle Difference Analysis Results (Per File)\n", "=====\n", "\n"]
    + _entry("a.txt", 214, 0.81)
    + _entry("b.txt", 7, 12.5)
    + _entry("c.txt", 9, 3.25)
)


def test_picks_largest_difference():
    result = find_global_max(ANALYSIS)
    assert result == GlobalMaxResult("b.txt", 7, 12.5)


def test_ties_keep_first_entry():
    lines = _entry("first.txt", 1, 2.0) + _entry("second.txt", 2, 2.0)
    assert find_global_max(lines).filename == "first.txt"


def test_difference_without_profile_is_ignored():
    lines = ["File: x.txt\n", "Angle difference: 99.0\n"] + _entry("y.txt", 4, 1.5)
    assert find_global_max(lines) == GlobalMaxResult("y.txt", 4, 1.5)


def test_new_file_resets_profile():
    lines = [
        "File: x.txt\n",
        "Profile with maximum angle difference: 3\n",
        "File: y.txt\n",
        "Angle difference: 50.0\n",
    ]
    assert find_global_max(lines) is None


def test_zero_differences_give_no_result():
    assert find_global_max(_entry("z.txt", 1, 0.0)) is None


def test_carriage_return_stripped_from_filename():
    lines = ["File: w.txt\r\n", "Profile with maximum angle difference: 5\r\n", "Angle difference: 4.0\r\n"]
    assert find_global_max(lines).filename == "w.txt"


def test_file_round_trip(tmp_path):
    source = tmp_path / "angle_analysis_result.txt"
    source.write_text("".join(ANALYSIS), encoding="utf-8")
    target = tmp_path / "max_angle_result.txt"
    result = find_global_max_from_analysis_result(source, target)
    text = target.read_text(encoding="utf-8")
    assert text == result.report()
    assert text.startswith("Global Maximum Angle Difference Analysis Result\n")
    assert "File with maximum angle difference: b.txt\n" in text
    assert "Profile with maximum angle difference: 7\n" in text
    assert text.endswith("Maximum angle difference: 12.500000\n")


def test_no_results_raises_and_writes_nothing(tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("nothing here\n", encoding="utf-8")
    target = tmp_path / "out.txt"
    with pytest.raises(MaxFinderError):
        find_global_max_from_analysis_result(source, target)
    assert not target.exists()


def test_missing_input_raises(tmp_path):
    with pytest.raises(MaxFinderError):
        find_global_max_from_analysis_result(tmp_path / "missing.txt", tmp_path / "out.txt")