import json

from batch import build_document, run_batch, solve_all_dates, to_json
from solver import SolveConfig


def test_solve_all_dates_reports_each_date():
    seen = []
    results = solve_all_dates(
        SolveConfig.exhaustive(),
        dates=[("FOO", 1), ("JAN", 32)],
        progress=lambda i, total, r: seen.append((i, total, r.month, r.day)),
    )
    assert [r.count for r in results] == [0, 0]
    assert seen == [(1, 2, "FOO", "1"), (2, 2, "JAN", "32")]


def test_build_document_shape():
    results = solve_all_dates(SolveConfig.first_only(), dates=[("DEC", 0)])
    doc = build_document(results, generated_at="2026-01-01T00:00:00+00:00")
    assert doc["generated_at"] == "2026-01-01T00:00:00+00:00"
    assert doc["total_time"] >= 0
    assert doc["results"] == [
        {"month": "DEC", "day": 0, "solutions": 0, "grids": [], "time": doc["results"][0]["time"]}
    ]
    assert json.loads(to_json(doc)) == doc


def test_run_batch_times_the_whole_run():
    doc = run_batch(SolveConfig.exhaustive(), dates=[("JAN", 0), ("MAY", 40)])
    assert [(r["month"], r["day"]) for r in doc["results"]] == [("JAN", 0), ("MAY", 40)]
    assert doc["total_time"] >= 0
