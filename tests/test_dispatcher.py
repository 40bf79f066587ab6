"""
Tests for the batch mode search over cells.
"""

import numpy as np
import pytest

from mnopop.config import ModeLambdaConfig
from mnopop import (
    CellDispatcher, FunctionDensity, GammaPrior, InputError, NumericalError,
    UniformPrior, initial_bracket, mode_lambda,
)
from mnopop.utils import ProgressReporter

N_MNO = [20, 17, 25]
N_REG = [115, 123, 119]


class RecordingReporter(ProgressReporter):

    def __init__(self):
        self.events = []

    def cell_started(self, i, n_cells):
        self.events.append(("started", i, n_cells))

    def cell_finished(self, i, mode):
        self.events.append(("finished", i))

    def cell_failed(self, i, error):
        self.events.append(("failed", i))


class TestBatch:

    def test_three_cell_example(self, config, peaked, batch_priors):
        modes = mode_lambda(N_MNO, N_REG, *batch_priors, evaluator=peaked, config=config)
        assert isinstance(modes, np.ndarray)
        assert modes.shape == (3,)
        for mode, nm, nr in zip(modes, N_MNO, N_REG):
            s = initial_bracket(nm, nr)
            assert s.a < mode < s.b
            assert abs(mode - 0.55 * (nm + nr)) < 0.1

    def test_priors_sliced_per_cell(self, config, peaked, batch_priors):
        mode_lambda(N_MNO, N_REG, *batch_priors, evaluator=peaked, config=config)
        seen = {}
        for call in peaked.calls:
            seen.setdefault(call["n_mno"], call)
        assert seen[20]["fu"].x_min == 0.3 and seen[20]["fv"].scale == 12
        assert seen[17]["fu"].x_max == 0.45 and seen[17]["flambda"].scale == 12.3
        assert seen[25]["fv"].shape == 13 and seen[25]["flambda"].scale == 12
        assert all(call["fu"].tag == "unif" for call in peaked.calls)
        assert all(call["flambda"].tag == "gamma" for call in peaked.calls)

    def test_cells_processed_in_order(self, config, peaked, batch_priors):
        mode_lambda(N_MNO, N_REG, *batch_priors, evaluator=peaked, config=config)
        order = []
        for call in peaked.calls:
            if not order or order[-1] != call["n_mno"]:
                order.append(call["n_mno"])
        assert order == N_MNO

    def test_each_cell_matches_single_cell_run(self, config, peaked, batch_priors):
        modes = mode_lambda(N_MNO, N_REG, *batch_priors, evaluator=peaked, config=config)
        dispatcher = CellDispatcher(config, peaked)
        for i, (nm, nr) in enumerate(zip(N_MNO, N_REG)):
            single = dispatcher.run(nm, nr, *(p.slice(i) for p in batch_priors))
            assert single == modes[i]

    def test_reversed_input_reverses_output(self, config, peaked):
        priors = (UniformPrior(0.3, 0.5), GammaPrior(11, 12), GammaPrior(11, 12))
        forward = mode_lambda(N_MNO, N_REG, *priors, evaluator=peaked, config=config)
        backward = mode_lambda(N_MNO[::-1], N_REG[::-1], *priors, evaluator=peaked, config=config)
        np.testing.assert_array_equal(forward, backward[::-1])

    def test_per_cell_prior_lists(self, config, peaked):
        fu = [("unif", {"xMin": 0.3, "xMax": 0.5}),
              ("unif", {"xMin": 0.35, "xMax": 0.45}),
              ("unif", {"xMin": 0.25, "xMax": 0.43})]
        fv = [GammaPrior(11, 12), GammaPrior(12, 12.3), GammaPrior(13, 11.5)]
        flambda = [GammaPrior(11, 12), GammaPrior(12, 12.3), GammaPrior(13, 12)]
        modes = mode_lambda(N_MNO, N_REG, fu, fv, flambda, evaluator=peaked, config=config)
        assert modes.shape == (3,)
        assert {c["fu"].x_min for c in peaked.calls} == {0.3, 0.35, 0.25}

    def test_zero_cell_in_batch(self, config, peaked, priors):
        modes = mode_lambda([0, 20], [0, 20], *priors, evaluator=peaked, config=config)
        assert modes[0] == 0.0
        assert abs(modes[1] - 22.0) < 0.05
        assert {c["n_mno"] for c in peaked.calls} == {20}

    def test_thread_pool_preserves_order(self, peaked, batch_priors):
        sequential = mode_lambda(N_MNO, N_REG, *batch_priors, evaluator=peaked, config=ModeLambdaConfig())
        parallel = mode_lambda(N_MNO, N_REG, *batch_priors, evaluator=peaked, config=ModeLambdaConfig(n_workers=3))
        np.testing.assert_array_equal(sequential, parallel)

    def test_run_detailed(self, config, peaked, batch_priors):
        results = CellDispatcher(config, peaked).run_detailed(N_MNO, N_REG, *batch_priors)
        assert len(results) == 3
        assert all(r.n_evals == r.n_iter + 4 for r in results)


class TestSingleCell:

    def test_scalar_inputs_return_float(self, config, quadratic, priors):
        mode = mode_lambda(20, 20, *priors, evaluator=quadratic, config=config)
        assert isinstance(mode, float)
        assert abs(mode - 20.0) < 1e-4

    def test_length_one_vectors_return_float(self, config, quadratic, priors):
        mode = mode_lambda([20], np.array([20]), *priors, evaluator=quadratic, config=config)
        assert isinstance(mode, float)

    def test_zero_counts(self, config, quadratic, priors):
        assert mode_lambda(0, 0, *priors, evaluator=quadratic, config=config) == 0.0
        assert quadratic.n_calls == 0

    def test_options_override_config(self, quadratic, priors):
        config = ModeLambdaConfig(max_iter=1000)
        with pytest.raises(NumericalError):
            mode_lambda(20, 20, *priors, evaluator=quadratic, config=config, max_iter=2)

    def test_options_without_config(self, peaked, priors):
        mode_lambda(20, 20, *priors, evaluator=peaked, n_sim=200, n_threads=1)
        assert peaked.calls[0]["options"]["n_sim"] == 200
        assert peaked.calls[0]["options"]["n_threads"] == 1


class TestValidation:

    def test_count_length_mismatch(self, config, peaked, priors):
        with pytest.raises(InputError, match="same length"):
            mode_lambda([20, 17], [115, 123, 119], *priors, evaluator=peaked, config=config)
        assert peaked.calls == []

    def test_prior_length_mismatch(self, config, peaked, priors):
        fu, fv, _ = priors
        flambda = GammaPrior(shape=[11, 12], scale=[12, 12.3])
        with pytest.raises(InputError, match="flambda"):
            mode_lambda(N_MNO, N_REG, fu, fv, flambda, evaluator=peaked, config=config)
        assert peaked.calls == []

    def test_prior_list_length_mismatch(self, config, peaked, priors):
        fu, _, flambda = priors
        fv = [GammaPrior(11, 12), GammaPrior(12, 12.3)]
        with pytest.raises(InputError, match="fv"):
            mode_lambda(N_MNO, N_REG, fu, fv, flambda, evaluator=peaked, config=config)

    def test_negative_count(self, config, peaked, priors):
        with pytest.raises(InputError):
            mode_lambda([20, -1], [5, 5], *priors, evaluator=peaked, config=config)
        assert peaked.calls == []

    def test_matrix_counts_rejected(self, config, peaked, priors):
        with pytest.raises(InputError):
            mode_lambda([[1, 2]], [[3, 4]], *priors, evaluator=peaked, config=config)

    def test_unknown_prior_tag(self, config, peaked, priors):
        fu, fv, _ = priors
        with pytest.raises(InputError, match="Unknown prior"):
            mode_lambda(N_MNO, N_REG, fu, fv, ("lognormal", 1.0, 2.0), evaluator=peaked, config=config)


class TestFailurePolicy:

    @staticmethod
    def failing_density(lambdas, n_mno, n_reg, fu, fv, flambda, **options):
        x = np.asarray(lambdas, dtype=float)
        if n_mno == 17:
            return {"probLambda": np.full_like(x, np.nan)}
        return {"probLambda": -(x - 0.55 * (n_mno + n_reg)) ** 2}

    def test_abort_all_by_default(self, config, priors):
        with pytest.raises(NumericalError):
            mode_lambda(N_MNO, N_REG, *priors, evaluator=self.failing_density, config=config)

    def test_nan_marks_failed_cell(self, priors):
        reporter = RecordingReporter()
        modes = mode_lambda(N_MNO, N_REG, *priors, evaluator=self.failing_density,
                            config=ModeLambdaConfig(on_cell_error="nan"), reporter=reporter)
        assert np.isnan(modes[1])
        assert np.isfinite(modes[0]) and np.isfinite(modes[2])
        assert ("failed", 1) in reporter.events
        assert ("finished", 2) in reporter.events

    def test_other_evaluator_errors_propagate(self, priors):
        def broken(*args, **kwargs):
            raise RuntimeError("integration failed")

        with pytest.raises(RuntimeError, match="integration failed"):
            mode_lambda(N_MNO, N_REG, *priors, evaluator=broken, config=ModeLambdaConfig(on_cell_error="nan"))


class TestProgress:

    def test_reporter_receives_cells_in_order(self, config, peaked, batch_priors):
        reporter = RecordingReporter()
        mode_lambda(N_MNO, N_REG, *batch_priors, evaluator=peaked, config=config, reporter=reporter)
        assert reporter.events == [
            ("started", 0, 3), ("finished", 0),
            ("started", 1, 3), ("finished", 1),
            ("started", 2, 3), ("finished", 2),
        ]

    def test_silent_by_default(self, config, peaked, batch_priors, capsys):
        mode_lambda(N_MNO, N_REG, *batch_priors, evaluator=peaked, config=config)
        assert capsys.readouterr().out == ""

    def test_verbose_prints_progress(self, peaked, batch_priors, capsys):
        mode_lambda(N_MNO, N_REG, *batch_priors, evaluator=peaked, config=ModeLambdaConfig(verbose=True))
        out = capsys.readouterr().out
        assert "Computing for cell 1..." in out
        assert "Computing for cell 3..." in out
        assert out.count("Searching maximum...") == 3
        assert out.count(" ok.") == 3

    def test_verbose_flag_reaches_evaluator(self, peaked, priors):
        mode_lambda(20, 20, *priors, evaluator=peaked, config=ModeLambdaConfig(verbose=True))
        assert peaked.calls[0]["options"]["verbose"] is True
