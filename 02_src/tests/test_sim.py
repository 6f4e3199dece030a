"""Tests for SIM workload."""

from sim import Sim


class TestSim:
    """Tests for the synthetic workload."""

    def test_workers_retire_request_trees(self, profiler):
        """Test that every worker retires its nested request spans."""
        sim = Sim(profiler=profiler, workers=2, requests_per_worker=2, max_sleep=0)
        sim.start()
        assert sim.running
        sim.join()
        assert not sim.running

        retired = profiler.threads()[1:]
        assert sorted(t.name for t in retired) == ["sim-worker-0", "sim-worker-1"]

        for thread in retired:
            assert [s.name for s in thread.spans] == ["handle request", "handle request"]
            request = thread.spans[0]
            assert [c.name for c in request.children] == ["parse", "query", "render"]

            query = request.children[1]
            assert [c.name for c in query.children] == ["fetch row"]
            assert query.children[0].delta == 3_000_000
            assert query.notes[0].name == "rows fetched"

    def test_start_twice_is_noop(self, profiler):
        """Test that a running SIM is not started again."""
        sim = Sim(profiler=profiler, workers=1, requests_per_worker=1, max_sleep=0)
        sim.start()
        sim.start()
        sim.join()

        assert len(profiler.threads()) == 2
