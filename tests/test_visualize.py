"""Tests for the animation driver."""

import os

import pytest

import visualize
from aco_tsp import ACOConfig, Colony


class TestBuildInstance:
    """City set construction from command-line flags."""

    @pytest.mark.parametrize("n,expected", [(1, 2), (0, 2), (12, 12), (500, 100)])
    def test_city_count_is_clamped(self, n, expected):
        args = visualize.build_argparser().parse_args(["--n", str(n)])
        assert visualize.build_instance(args).n_cities() == expected

    def test_single_city_csv_is_a_usage_error(self, tmp_path):
        path = tmp_path / "one.csv"
        path.write_text("1,1\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            visualize.main(["--csv", str(path), "--outdir", str(tmp_path)])
        assert exc.value.code == 2


class TestRendering:
    """Frames, GIF and pheromone heatmap."""

    def test_heatmap_is_written(self, tmp_path):
        colony = Colony.from_coords([(0, 0), (0, 10), (10, 10)], ACOConfig(n_ants=3, seed=1))
        colony.run(1)
        out = tmp_path / "heat" / "pheromone.png"
        visualize.draw_heatmap(colony, str(out))
        assert out.exists()
        assert out.stat().st_size > 0

    def test_main_writes_gif_and_heatmap(self, tmp_path):
        visualize.main(["--n", "3", "--cycles", "1", "--ants", "2", "--frame-every", "1",
                        "--outdir", str(tmp_path), "--heatmap"])
        assert os.path.exists(tmp_path / "colony.gif")
        assert os.path.exists(tmp_path / "pheromone.png")
