"""Tests for the GPU process correlator."""

from __future__ import annotations

from app.collectors.gpu_processes import correlate_gpu_processes
from app.collectors.series import CorrelationStats


def proc_labels(
    hostname="node1",
    gpu_id="0",
    pid="1234",
    process_name="python",
    user="user1",
    command="python train.py",
):
    labels = {
        "hostname": hostname,
        "gpu_id": gpu_id,
        "pid": pid,
        "process_name": process_name,
        "user": user,
        "command": command,
    }
    return {k: v for k, v in labels.items() if v is not None}


class TestProcessCorrelation:
    def test_single_process(self, make_response, fixed_now):
        """Test a single process point becomes one full record."""
        responses = {"gpu_memory": make_response((proc_labels(), "2048"))}

        processes = correlate_gpu_processes(responses, now=fixed_now)

        assert len(processes) == 1
        p = processes[0]
        assert p.node_name == "node1"
        assert p.gpu_index == 0
        assert p.pid == 1234
        assert p.process_name == "python"
        assert p.user == "user1"
        assert p.command == "python train.py"
        assert p.gpu_memory == 2048
        assert p.timestamp == fixed_now()

    def test_same_pid_on_two_gpus_is_two_records(self, make_response, fixed_now):
        """Test a multi-GPU process yields one record per GPU."""
        responses = {
            "gpu_memory": make_response(
                (proc_labels(gpu_id="0"), "1024"),
                (proc_labels(gpu_id="1"), "4096"),
            ),
        }

        processes = correlate_gpu_processes(responses, now=fixed_now)

        assert [(p.gpu_index, p.pid, p.gpu_memory) for p in processes] == [
            (0, 1234, 1024),
            (1, 1234, 4096),
        ]

    def test_descriptive_labels_from_first_point(self, make_response, fixed_now):
        """Test later points update memory but not name/user/command."""
        responses = {
            "gpu_memory": make_response(
                (proc_labels(process_name="python", user="alice"), "100"),
                (proc_labels(process_name="renamed", user="bob"), "200"),
            ),
        }

        processes = correlate_gpu_processes(responses, now=fixed_now)

        assert len(processes) == 1
        assert processes[0].process_name == "python"
        assert processes[0].user == "alice"
        assert processes[0].gpu_memory == 200

    def test_missing_descriptive_labels_default_empty(self, make_response, fixed_now):
        labels = {"hostname": "node1", "gpu_id": "0", "pid": "42"}
        responses = {"gpu_memory": make_response((labels, "1"))}

        p = correlate_gpu_processes(responses, now=fixed_now)[0]

        assert p.process_name == ""
        assert p.user == ""
        assert p.command == ""


class TestOrdering:
    def test_sorted_by_node_gpu_pid(self, make_response, fixed_now):
        """Test ordering is node lexicographic, then GPU and pid numeric."""
        responses = {
            "gpu_memory": make_response(
                (proc_labels(hostname="node2", gpu_id="0", pid="5"), "1"),
                (proc_labels(hostname="node1", gpu_id="10", pid="1"), "1"),
                (proc_labels(hostname="node1", gpu_id="2", pid="300"), "1"),
                (proc_labels(hostname="node1", gpu_id="2", pid="40"), "1"),
            ),
        }

        processes = correlate_gpu_processes(responses, now=fixed_now)

        assert [(p.node_name, p.gpu_index, p.pid) for p in processes] == [
            ("node1", 2, 40),
            ("node1", 2, 300),
            ("node1", 10, 1),
            ("node2", 0, 5),
        ]


class TestSkippedPoints:
    def test_missing_pid_dropped(self, make_response, fixed_now):
        """Test a point without pid yields nothing; valid points are kept."""
        stats = CorrelationStats()
        responses = {
            "gpu_memory": make_response(
                (proc_labels(pid=None), "1024"),
                (proc_labels(pid="99"), "512"),
            ),
        }

        processes = correlate_gpu_processes(responses, stats=stats, now=fixed_now)

        assert [p.pid for p in processes] == [99]
        assert stats.missing_identity == 1

    def test_any_missing_identity_label_dropped(self, make_response, fixed_now):
        responses = {
            "gpu_memory": make_response(
                (proc_labels(hostname=""), "1"),
                (proc_labels(gpu_id=None), "1"),
                (proc_labels(gpu_id="x"), "1"),
                (proc_labels(pid="12a"), "1"),
                (proc_labels(pid="007"), "1"),
            ),
        }

        assert correlate_gpu_processes(responses, now=fixed_now) == []

    def test_unparseable_value_keeps_zero_memory_record(self, make_response, fixed_now):
        stats = CorrelationStats()
        responses = {"gpu_memory": make_response((proc_labels(), "n/a"))}

        processes = correlate_gpu_processes(responses, stats=stats, now=fixed_now)

        assert len(processes) == 1
        assert processes[0].gpu_memory == 0
        assert stats.invalid_value == 1


class TestEdgeCases:
    def test_empty_input_returns_empty_list(self):
        """Test empty input yields an empty list, not None."""
        processes = correlate_gpu_processes({})

        assert processes is not None
        assert processes == []

    def test_empty_result_returns_empty_list(self, make_response):
        assert correlate_gpu_processes({"gpu_memory": make_response()}) == []

    def test_none_response_skipped(self):
        assert correlate_gpu_processes({"gpu_memory": None}) == []

    def test_idempotent(self, make_response, fixed_now):
        responses = {
            "gpu_memory": make_response(
                (proc_labels(pid="1"), "10"),
                (proc_labels(pid="2", gpu_id="1"), "20"),
            ),
        }

        first = correlate_gpu_processes(responses, now=fixed_now)
        second = correlate_gpu_processes(responses, now=fixed_now)

        assert first == second
