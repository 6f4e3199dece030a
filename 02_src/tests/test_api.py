"""Tests for the HTTP API."""

import pytest

from flamespan.api.routes import control
from flamespan.exporters import JSON_SCHEMA_URL


def _record_on_worker(profiler, run_in_thread, name="T1"):
    def worker():
        profiler.start("request")
        profiler.start("db")
        profiler.end("db")
        profiler.end("request")
        profiler.commit_thread()

    return run_in_thread(worker, name=name)


class TestObservabilityRoutes:
    """Tests for /api observability routes."""

    @pytest.mark.asyncio
    async def test_get_threads(self, client, profiler, run_in_thread):
        """Test that retired threads are served as JSON."""
        worker = _record_on_worker(profiler, run_in_thread)

        response = await client.get("/api/threads")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 2
        retired = data[1]
        assert retired["id"] == worker.ident
        assert retired["name"] == "T1"
        assert retired["spans"][0]["name"] == "request"
        assert retired["spans"][0]["children"][0]["name"] == "db"
        assert retired["spans"][0]["children"][0]["depth"] == 1

    @pytest.mark.asyncio
    async def test_get_report(self, client, profiler, run_in_thread):
        """Test the plain-text report."""
        worker = _record_on_worker(profiler, run_in_thread)

        response = await client.get("/api/report")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert f"THREAD: {worker.ident}" in response.text
        assert "| request: 3ms" in response.text
        assert "  | db: 1ms" in response.text
        assert "  + 2ms" in response.text

    @pytest.mark.asyncio
    async def test_get_speedscope_for_thread(self, client, profiler, run_in_thread):
        """Test speedscope export for one thread."""
        worker = _record_on_worker(profiler, run_in_thread)

        response = await client.get("/api/speedscope", params={"thread_id": worker.ident})

        assert response.status_code == 200
        data = response.json()
        assert data["$schema"] == JSON_SCHEMA_URL
        assert data["exporter"] == "flamespan"
        assert [f["name"] for f in data["shared"]["frames"]] == ["request", "db"]
        assert len(data["profiles"]) == 1
        assert data["profiles"][0]["type"] == "evented"

    @pytest.mark.asyncio
    async def test_get_speedscope_all_threads(self, client, profiler, run_in_thread):
        """Test that omitting thread_id exports every thread."""
        _record_on_worker(profiler, run_in_thread, name="T1")
        _record_on_worker(profiler, run_in_thread, name="T2")

        response = await client.get("/api/speedscope")

        assert response.status_code == 200
        assert len(response.json()["profiles"]) == 2

    @pytest.mark.asyncio
    async def test_get_speedscope_unknown_thread(self, client):
        """Test 404 for a thread that never recorded."""
        response = await client.get("/api/speedscope", params={"thread_id": 12345})
        assert response.status_code == 404


class TestControlRoutes:
    """Tests for /api/control routes."""

    @pytest.mark.asyncio
    async def test_clear(self, client, profiler, run_in_thread):
        """Test that clear empties the registry."""
        _record_on_worker(profiler, run_in_thread)

        response = await client.post("/api/control/clear")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert profiler.registry.entries() == []

    @pytest.mark.asyncio
    async def test_sim_not_configured(self, client):
        """Test 404 when no SIM instance is set."""
        response = await client.post("/api/control/sim/start")
        assert response.status_code == 404

        response = await client.post("/api/control/sim/stop")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_sim_start_and_stop(self, client, profiler):
        """Test that SIM control routes drive the configured SIM."""
        from sim import Sim

        sim = Sim(profiler=profiler, workers=2, requests_per_worker=1, max_sleep=0)
        control.set_sim_instance(sim)

        response = await client.post("/api/control/sim/start")
        assert response.status_code == 200
        sim.join()

        response = await client.post("/api/control/sim/stop")
        assert response.status_code == 200

        response = await client.get("/api/threads")
        names = sorted(t["name"] for t in response.json()[1:])
        assert names == ["sim-worker-0", "sim-worker-1"]
