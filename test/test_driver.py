"""Tests for the driver and the command line interface."""

import os

import h5py
import numpy as np
import pytest

from larvtx import Driver
from larvtx.bin.cli import cli
from larvtx.config.errors import ConfigValidationError
from larvtx.geo import WirePlaneProjector
from larvtx.utils.enums import VIEWS

CLUSTER_LIST_NAMES = ["clusters_u", "clusters_v", "clusters_w"]


@pytest.fixture(name="hdf5_input")
def fixture_hdf5_input(tmp_path, burst):
    """Create an input file with two events.

    The first event has a single candidate with a burst of hits radiating
    from it in every view. The second event has a single candidate with no
    hit in its vicinity.
    """
    path = os.path.join(tmp_path, "events.h5")
    geometry = WirePlaneProjector()
    positions = [[10.0, 5.0, 20.0], [-10.0, 0.0, 50.0]]
    with h5py.File(path, "w") as out_file:
        events = out_file.create_group("events")
        for i, position in enumerate(positions):
            event = events.create_group(str(i))
            event.create_dataset("vertices", data=[position])
            for name, view in zip(CLUSTER_LIST_NAMES, VIEWS):
                proj = geometry.project_position(np.array(positions[0]), view)
                cluster = event.create_group(name).create_group("0")
                cluster.attrs["hit_type"] = view.name
                cluster.create_dataset("points", data=proj + burst)

    return path


@pytest.fixture(name="driver_cfg")
def fixture_driver_cfg(hdf5_input, selection_cfg, tmp_path):
    """Full driver configuration."""
    return {
        "base": {"verbosity": "warning"},
        "io": {
            "reader": {
                "name": "hdf5",
                "file_keys": hdf5_input,
                "cluster_list_names": CLUSTER_LIST_NAMES,
            },
            "writer": {"name": "csv", "file_name": os.path.join(tmp_path, "out.csv")},
        },
        "algo": {"vertex_selection": selection_cfg},
    }


def read_rows(path):
    """Reads the data rows of a CSV output file."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.split(",") for line in f.read().splitlines()[1:]]


class TestDriver:
    """Test the driver of the vertex selection."""

    def test_process(self, driver_cfg):
        """Test processing the entries one at a time."""
        driver = Driver(driver_cfg)
        assert len(driver) == 2

        result = driver.process(0)
        assert result["index"] == 0
        assert len(result["candidates"]) == 1
        assert len(result["selected"]) == 1
        assert result["context"].current_vertex_list_name == "selected"

        result = driver.process(1)
        assert len(result["selected"]) == 0
        assert result["context"].current_vertex_list_name == "candidates"

    def test_run(self, driver_cfg):
        """Test running over all the entries and writing the output."""
        assert Driver(driver_cfg).run() == 1

        rows = read_rows(driver_cfg["io"]["writer"]["file_name"])
        assert len(rows) == 2
        assert rows[0][:4] == ["0", "1", "1", "0"]
        assert float(rows[0][4]) == pytest.approx(10.0)
        assert rows[1][:4] == ["1", "1", "0", "-1"]

    def test_no_writer(self, driver_cfg):
        """Test running without storing the output."""
        del driver_cfg["io"]["writer"]

        assert Driver(driver_cfg).run() == 1

    def test_no_algorithm(self, driver_cfg):
        """Test that at least one algorithm must be configured."""
        driver_cfg["algo"] = {}
        with pytest.raises(ConfigValidationError):
            Driver(driver_cfg)

    def test_process_event(self, driver_cfg, make_event, burst):
        """Test running the algorithms on an in-memory event."""
        del driver_cfg["io"]
        driver = Driver(driver_cfg)
        context = make_event([[0.0, 0.0, 0.0]], [burst])

        result = driver.process_event(
            context.vertex_lists, context.cluster_lists, 5, "candidates"
        )

        assert len(driver) == 0
        assert result["index"] == 5
        assert len(result["selected"]) == 1


class TestCLI:
    """Test the command line interface."""

    def test_cli(self, tmp_path, hdf5_input):
        """Test running the selection from a configuration file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"""
base:
  verbosity: warning
io:
  reader:
    name: hdf5
    file_keys: {hdf5_input}
    cluster_list_names: [clusters_u, clusters_v, clusters_w]
algo:
  vertex_selection:
    input_cluster_list_name_u: clusters_u
    input_cluster_list_name_v: clusters_v
    input_cluster_list_name_w: clusters_w
    output_vertex_list_name: selected
""")
        output = os.path.join(tmp_path, "cli.csv")

        cli(["-c", str(config_file), "-o", output, "-n", "1"])

        rows = read_rows(output)
        assert len(rows) == 1
        assert rows[0][:4] == ["0", "1", "1", "0"]

    def test_cli_overrides(self, tmp_path, hdf5_input):
        """Test overriding configuration parameters from the command line."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("""
io:
  reader:
    name: hdf5
    cluster_list_names: [clusters_u, clusters_v, clusters_w]
algo:
  vertex_selection:
    input_cluster_list_name_u: clusters_u
    input_cluster_list_name_v: clusters_v
    input_cluster_list_name_w: clusters_w
    output_vertex_list_name: selected
""")
        output = os.path.join(tmp_path, "cli.csv")

        cli(
            [
                "-c",
                str(config_file),
                "-s",
                hdf5_input,
                "-o",
                output,
                "--set",
                "algo.vertex_selection.max_top_score_candidates=0",
            ]
        )

        rows = read_rows(output)
        assert len(rows) == 2
        assert [row[2] for row in rows] == ["0", "0"]

    def test_cli_parameter_override(self, tmp_path, hdf5_input):
        """Test overriding a selection parameter by its configuration key."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"""
io:
  reader:
    name: hdf5
    file_keys: {hdf5_input}
    cluster_list_names: [clusters_u, clusters_v, clusters_w]
algo:
  vertex_selection:
    input_cluster_list_name_u: clusters_u
    input_cluster_list_name_v: clusters_v
    input_cluster_list_name_w: clusters_w
    output_vertex_list_name: selected
""")
        output = os.path.join(tmp_path, "cli.csv")

        cli(
            [
                "-c",
                str(config_file),
                "-o",
                output,
                "--set",
                "algo.vertex_selection.histogram_n_phi_bins=100",
                "--set",
                "algo.vertex_selection.replace_current_vertex_list=false",
            ]
        )

        rows = read_rows(output)
        assert len(rows) == 2
        assert [row[2] for row in rows] == ["1", "0"]

    def test_cli_invalid_override(self, tmp_path, hdf5_input):
        """Test that malformed overrides are rejected."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"io:\n  reader:\n    file_keys: {hdf5_input}\n")

        with pytest.raises(ValueError):
            cli(["-c", str(config_file), "--set", "algo.vertex_selection"])

    def test_cli_missing_reader(self, tmp_path):
        """Test that the configuration must define a reader."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("algo:\n  vertex_selection: {}\n")

        with pytest.raises(KeyError):
            cli(["-c", str(config_file)])
