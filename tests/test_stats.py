import json
import random

import pytest

from devpost_stats.config import TRACKED_FIELDS, FieldSpec, StatsConfig
from devpost_stats.errors import AggregationError, InputNotFoundError
from devpost_stats.output import render_report
from devpost_stats.stats import StatsReport, aggregate, build_stats
from devpost_stats.submissions import map_rows, parse_csv


class RecordingProgress:
    def __init__(self):
        self.events = []

    def start(self, message):
        self.events.append(("start", message))

    def succeed(self, message):
        self.events.append(("succeed", message))

    def fail(self, message):
        self.events.append(("fail", message))


def _submissions(text):
    return map_rows(parse_csv(text))


def test_single_row_prizes_and_technologies():
    report = aggregate(_submissions('"Desired Prizes","Built With"\n"Best UI, Best Hack","React, Node"'))

    assert report.count == 1
    assert report.prizes == {"Best UI": 1, "Best Hack": 1}
    assert report.technologies == {"React": 1, "Node": 1}
    assert report.universities == {}


def test_shared_technology_is_counted_per_row():
    report = aggregate(_submissions('"Built With"\n"React, Node"\n"React"\n'))
    assert report.technologies["React"] == 2


def test_empty_cell_still_counts_as_submission():
    report = aggregate(_submissions('"Desired Prizes","Built With"\n"","React"\n"Best Hack","Vue"\n'))
    assert report.count == 2
    assert report.prizes == {"Best Hack": 1}


def test_repeated_token_in_one_cell_counts_twice():
    report = aggregate([{"Built With": "React, React"}])
    assert report.technologies == {"React": 2}


@pytest.mark.parametrize("size", [0, 1, 7])
def test_count_equals_number_of_submissions(size):
    submissions = [{"Built With": "React"} for _ in range(size)]
    assert aggregate(submissions).count == size


def test_counts_do_not_depend_on_submission_order():
    submissions = _submissions(
        '"Desired Prizes","College/Universities Of Team Members","Built With"\n'
        '"Best UI","Ohio State University","React, Node"\n'
        '"Best Hack, Best UI","","Python"\n'
        '"","Kent State University, Ohio State University","React"\n'
    )
    shuffled = list(submissions)
    random.Random(7).shuffle(shuffled)

    original = aggregate(submissions)
    reordered = aggregate(shuffled)
    for tag in ("universities", "technologies", "prizes"):
        assert original.tables[tag] == reordered.tables[tag]


def test_report_keeps_all_columns():
    submissions = _submissions('"Submission Title","Built With"\n"Plant Pal","React"\n')
    report = aggregate(submissions)
    assert report.to_dict()["submissions"] == [{"Submission Title": "Plant Pal", "Built With": "React"}]


def test_report_dict_shape():
    data = aggregate([{"Built With": "React"}]).to_dict()
    assert list(data) == ["count", "submissions", "universities", "technologies", "prizes"]


def test_json_round_trip():
    report = aggregate(
        _submissions(
            '"Desired Prizes","College/Universities Of Team Members","Built With"\n'
            '"Best UI, Best Hack","Université de Montréal","React, Node"\n'
            '"Best Hack","","React"\n'
        )
    )
    restored = StatsReport.from_dict(json.loads(render_report(report)))
    assert restored == report
    assert restored.to_dict() == report.to_dict()


def test_from_dict_rejects_missing_count():
    with pytest.raises(ValueError):
        StatsReport.from_dict({"submissions": []})


def test_custom_fields():
    fields = (FieldSpec(key="Opt-In Prize", tag="opt_in"),)
    report = aggregate([{"Opt-In Prize": "Yes"}, {"Opt-In Prize": "Yes"}], fields=fields)
    assert report.to_dict() == {
        "count": 2,
        "submissions": [{"Opt-In Prize": "Yes"}, {"Opt-In Prize": "Yes"}],
        "opt_in": {"Yes": 2},
    }


def test_progress_events_per_field():
    progress = RecordingProgress()
    aggregate([{"Built With": "React"}], progress=progress)

    starts = [msg for kind, msg in progress.events if kind == "start"]
    assert len(starts) == len(TRACKED_FIELDS)
    assert ("succeed", "University count successful!") in progress.events


def test_failing_field_aborts_aggregation():
    progress = RecordingProgress()
    submissions = [{"Built With": "React", "Desired Prizes": 42}]

    with pytest.raises(AggregationError, match="Desired Prizes"):
        aggregate(submissions, progress=progress)  # type: ignore[list-item]

    assert progress.events[-1][0] == "fail"


def test_build_stats_reads_file(devpost_csv):
    report = build_stats(devpost_csv)

    assert report.count == 3
    assert report.prizes == {"Best UI": 1, "Best Hack": 2}
    assert report.universities == {"Ohio State University": 2, "Kent State University": 2}
    assert report.technologies == {"React": 2, "Node": 1, "Python": 1}


def test_build_stats_uses_config_separator(write_csv):
    path = write_csv('"Built With"\n"React|Node"\n')
    report = build_stats(path, StatsConfig(separator="|"))
    assert report.technologies == {"React": 1, "Node": 1}


def test_build_stats_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError) as exc_info:
        build_stats(tmp_path / "missing.csv")

    assert isinstance(exc_info.value, InputNotFoundError)
    assert str((tmp_path / "missing.csv").resolve()) in str(exc_info.value)


def test_blank_lines_are_not_submissions():
    report = aggregate(_submissions('"Built With"\n"React"\n\n"Vue"\n'))
    assert report.count == 2
    assert report.technologies == {"React": 1, "Vue": 1}


def test_report_is_unhashable():
    report = aggregate([{"Built With": "React"}])
    with pytest.raises(TypeError, match="StatsReport"):
        hash(report)
