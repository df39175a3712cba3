from pathlib import Path

import pytest

from schedsim.errors import WorkloadFormatError
from schedsim.models import Process
from schedsim.workload_io import load_workload, processes_from_times, sample_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":4,"arrival_time":0,"burst_time":3},'
                 '{"arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].pid == 4
    assert procs[1].pid == 2
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time\n0,5\n1,3\n2,8\n")
    procs = load_workload(p)
    assert [(x.pid, x.arrival_time, x.burst_time) for x in procs] == [(1, 0, 5), (2, 1, 3), (3, 2, 8)]


def test_load_csv_with_pid_column(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\n9,0,3\n,1,2\n")
    procs = load_workload(p)
    assert [x.pid for x in procs] == [9, 2]


def test_load_rejects_bad_entry(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"arrival_time":"soon","burst_time":2}]')
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_load_rejects_non_list_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"arrival_time":0,"burst_time":2}')
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_load_rejects_unknown_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("0 5\n")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_processes_from_times_length_mismatch():
    with pytest.raises(WorkloadFormatError):
        processes_from_times([0, 1], [3])


def test_sample_workload():
    procs = sample_workload()
    assert [(p.pid, p.arrival_time, p.burst_time) for p in procs] == [(1, 0, 5), (2, 1, 3), (3, 2, 8)]


@pytest.mark.parametrize("entry", [
    '{"arrival_time":0.9,"burst_time":2}',
    '{"arrival_time":0,"burst_time":2.7}',
])
def test_load_rejects_fractional_times(tmp_path: Path, entry):
    p = tmp_path / "w.json"
    p.write_text(f"[{entry}]")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_load_accepts_whole_float_times(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"arrival_time":1.0,"burst_time":3.0}]')
    procs = load_workload(p)
    assert (procs[0].arrival_time, procs[0].burst_time) == (1, 3)


def test_load_csv_rejects_fractional_times(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time\n0,2.7\n")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)
