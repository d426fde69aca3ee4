from rich.console import Console

from schedsim.algorithms import run_algorithm, schedule_fcfs, schedule_rr
from schedsim.models import Process
from schedsim.report import build_comparison_table, build_schedule_table, print_result, render_title


def _procs():
    return [Process(1, 0, 5), Process(2, 1, 3), Process(3, 2, 8)]


def test_render_title():
    assert render_title("Round-robin").splitlines() == [
        "-" * 22,
        "      Round-robin",
        "-" * 22,
    ]


def test_schedule_table_rows_and_footer():
    table = build_schedule_table(schedule_fcfs(_procs()))
    assert [c.header for c in table.columns] == [
        "ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit",
    ]
    assert table.row_count == 3
    assert table.columns[4].footer == "Average\n3.33"
    assert table.columns[5].footer == "Average\n8.67"
    assert table.columns[6].footer == "Throughput\n0.19/t"


def test_schedule_table_empty_is_not_applicable():
    table = build_schedule_table(schedule_fcfs([]))
    assert table.row_count == 0
    assert table.columns[4].footer == "Average\nn/a"
    assert table.columns[6].footer == "Throughput\nn/a"


def test_comparison_table():
    results = [run_algorithm(name, _procs()) for name in ("fcfs", "rr")]
    results.append(run_algorithm("sjf", []))
    table = build_comparison_table(results)
    assert table.row_count == 3

    console = Console(width=160, record=True)
    console.print(table)
    text = console.export_text()
    assert "Round-robin" in text
    assert "n/a" in text
    assert "100.0%" in text


def test_print_result_plain():
    console = Console(width=160, record=True, no_color=True)
    print_result(console, schedule_rr(_procs()), plain=True)
    text = console.export_text()
    assert "Round-robin" in text
    assert "Quantum: 4" in text
    assert "|   1   |   1   |   2   |   3   |   3   |" in text
    assert "Schedule table" in text
