import threading

from psychometrics_lab.core.utils import get_rng
from psychometrics_lab.items.pool import generic_items
from psychometrics_lab.simulation.config import SimulationParameters
from psychometrics_lab.simulation.data_models import SimulationResult
from psychometrics_lab.simulation.engine import run_simulation
from psychometrics_lab.simulation.history import RunHistory


def _result(seed: int = 0, n: int = 200) -> SimulationResult:
    return run_simulation(
        generic_items(10), SimulationParameters(sample_size=n), get_rng(seed)
    )


class TestRunHistory:
    def test_append_snapshots_headline_numbers(self) -> None:
        history = RunHistory()
        result = _result()
        run = history.append(result)

        assert run.run_id == 1
        assert run.sample_size == 200
        assert run.n_items == 10
        assert run.cronbach_alpha == result.reliability.cronbach_alpha
        assert run.sem == result.reliability.sem
        assert run.confidence_interval == (
            result.reliability.confidence_interval
        )

    def test_insertion_order(self) -> None:
        history = RunHistory()
        for n in (30, 200, 1000):
            history.append(_result(n=n))
        assert [r.sample_size for r in history] == [30, 200, 1000]
        assert [r.run_id for r in history.runs] == [1, 2, 3]
        assert len(history) == 3

    def test_runs_is_a_snapshot(self) -> None:
        history = RunHistory()
        history.append(_result())
        snapshot = history.runs
        history.append(_result(seed=1))
        assert len(snapshot) == 1
        assert len(history.runs) == 2

    def test_concurrent_appends_are_all_recorded(self) -> None:
        history = RunHistory()
        results = [_result(seed=s) for s in range(8)]
        threads = [
            threading.Thread(
                target=lambda r=r: [history.append(r) for _ in range(25)]
            )
            for r in results
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [run.run_id for run in history.runs]
        assert ids == list(range(1, 201))

    def test_to_dataframe(self) -> None:
        history = RunHistory()
        history.append(_result())
        history.append(_result(seed=1))
        df = history.to_dataframe()
        assert len(df) == 2
        assert "cronbach_alpha" in df.columns
        assert "sample_size" in df.columns

    def test_empty_dataframe_has_columns(self) -> None:
        df = RunHistory().to_dataframe()
        assert df.empty
        assert "run_id" in df.columns
