#!/usr/bin/env python3
"""Command line entry point of the vertex selection."""

import argparse
import os
import sys

from larvtx.config import load_config_file, parse_value, set_nested_value


def main(config, source, output, n, nskip, config_overrides):
    """Main driver of the vertex selection.

    Performs these basic functions:
    - Update the configuration with the command-line arguments
    - Run the selection on every requested entry

    Parameters
    ----------
    config : str
        Path to the configuration file
    source : List[str]
        List of paths to the input files
    output : str
        Path to the output file
    n : int
        Number of entries to process
    nskip : int
        Number of entries to skip
    config_overrides : List[str]
        List of config overrides in the form "key.path=value"

    Returns
    -------
    int
        Number of events with a selected vertex
    """
    # Load the configuration file
    cfg_file = os.path.abspath(config)
    cfg = load_config_file(cfg_file)

    # The configuration must minimally contain an IO block with a reader
    if cfg.get("io") is None or cfg["io"].get("reader") is None:
        raise KeyError("Configuration file must contain an `io.reader` block.")

    # Override the input command-line information into the configuration
    io_mapping = {"file_keys": source, "n_entry": n, "n_skip": nskip}
    for io_key, io_value in io_mapping.items():
        if io_value is not None:
            cfg["io"]["reader"][io_key] = io_value

    # Override the output path if provided
    if output is not None:
        if cfg["io"].get("writer") is None:
            cfg["io"]["writer"] = {"name": "csv"}
        cfg["io"]["writer"]["file_name"] = output

    # Apply any generic config overrides from --set arguments
    for override in config_overrides or []:
        if "=" not in override:
            raise ValueError(
                f"Invalid --set format: '{override}'. "
                f"Expected format: 'key.path=value'"
            )

        key_path, value_str = override.split("=", 1)
        cfg = set_nested_value(cfg, key_path.strip(), parse_value(value_str.strip()))

    # Import the driver only once the configuration is fully resolved
    from larvtx.driver import Driver

    return Driver(cfg).run()


def cli(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="larvtx - LArTPC interaction vertex selection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version", "-v", action="version", version=f"larvtx {get_version()}"
    )

    parser.add_argument(
        "-c", "--config", required=True, help="Path to the configuration file"
    )

    parser.add_argument(
        "-s", "--source", nargs="+", type=str, help="List of paths to the input files"
    )

    parser.add_argument("-o", "--output", help="Path to the output CSV file")

    parser.add_argument(
        "-n", "--iterations", type=int, help="Number of entries to process"
    )

    parser.add_argument("--nskip", type=int, help="Number of entries to skip")

    parser.add_argument(
        "--set",
        action="append",
        dest="config_overrides",
        metavar="KEY=VALUE",
        help=(
            "Override a configuration value "
            "(e.g. algo.vertex_selection.histogram_n_phi_bins=100)"
        ),
    )

    args = parser.parse_args(argv)

    main(
        config=args.config,
        source=args.source,
        output=args.output,
        n=args.iterations,
        nskip=args.nskip,
        config_overrides=args.config_overrides,
    )


def get_version():
    """Get the larvtx version string."""
    from larvtx.version import __version__

    return __version__


if __name__ == "__main__":
    sys.exit(cli())
