"""
Tests for the command-line interface
"""

import json
import sys

import numpy as np
import pytest

from cutplane import canonical_dumps, canonical_hash
from cutplane.cli import main, run_lmi, run_profit
from cutplane.core.status import Options


def _run(monkeypatch, *args):
    monkeypatch.setattr(sys, 'argv', ['cutplane', *args])
    return main()


class TestRunners:
    """Programmatic entry points behind the commands."""

    def test_profit_variants_agree_on_ellipsoid(self):
        """Plain and factored ellipsoids reach the same profit."""
        plain = run_profit("nominal", False, Options())
        stable = run_profit("nominal", True, Options())
        assert plain['target'] == pytest.approx(stable['target'], rel=1e-6)

    def test_lmi_report(self):
        report, x = run_lmi(False, Options())
        assert set(report) >= {'feasible', 'num_iters', 'status', 'x', 'min_eigenvalues'}
        assert len(report['x']) == 3
        if report['feasible']:
            assert min(report['min_eigenvalues']) > 0.0


class TestCommands:
    """argparse front end."""

    def test_version(self, monkeypatch, capsys):
        assert _run(monkeypatch, 'version') == 0
        assert capsys.readouterr().out.startswith('cutplane ')

    def test_no_command(self, monkeypatch, capsys):
        assert _run(monkeypatch) == 0
        assert 'usage' in capsys.readouterr().out

    def test_profit_output(self, monkeypatch, tmp_path):
        path = tmp_path / "profit.json"
        assert _run(monkeypatch, 'profit', '--stable', '-o', str(path)) == 0

        data = json.loads(path.read_text())
        assert data['variant'] == 'nominal'
        assert data['stable'] is True
        assert data['x_best'][0] <= 30.5 + 1e-6

    def test_output_digest(self, monkeypatch, tmp_path):
        """The saved report carries the digest of its other fields."""
        path = tmp_path / "lmi.json"
        _run(monkeypatch, 'lmi', '-o', str(path))

        data = json.loads(path.read_text())
        digest = data.pop('sha256')
        assert digest == canonical_hash(data)
        assert len(digest) == 64

    def test_discrete_output(self, monkeypatch, tmp_path):
        path = tmp_path / "profit_q.json"
        assert _run(monkeypatch, 'profit', '--discrete', '-o', str(path)) == 0

        data = json.loads(path.read_text())
        assert data['variant'] == 'q'
        np.testing.assert_allclose(data['x_best'], np.round(data['x_best']), atol=1e-9)

    def test_exclusive_variants(self, monkeypatch):
        with pytest.raises(SystemExit):
            _run(monkeypatch, 'profit', '--rb', '--discrete')

    def test_bench(self, monkeypatch, capsys):
        assert _run(monkeypatch, 'bench', '-r', '1') == 0
        out = capsys.readouterr().out
        for name in ('nominal', 'rb-stable', 'q'):
            assert name in out


class TestCanonicalJson:
    """Report serialization."""

    def test_numpy_values(self):
        text = canonical_dumps({'b': np.float64(1.5), 'a': np.array([1, 2])})
        assert text == '{"a":[1,2],"b":1.5}'

    def test_hash_is_order_independent(self):
        assert canonical_hash({'a': 1, 'b': 2}) == canonical_hash({'b': 2, 'a': 1})
