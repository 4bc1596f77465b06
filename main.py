import argparse
from pathlib import Path

from lesdiag import scripts
from lesdiag import globals

if __name__ == "__main__":

    output_dir: Path = Path("./output")
    data_dir: Path = Path("./data")

    parser = argparse.ArgumentParser(
        prog="les_diagnostics",
        description="Compute TKE budget and mixing length diagnostics from LES statistics",
        epilog="physical constants are read from <data_dir>/diagnostics.inp unless given here",
    )
    parser.add_argument(
        "-d",
        "--data_dir",
        nargs="?",
        type=Path,
        default=data_dir,
        help="directory in which the statistics file and diagnostics.inp are located",
    )
    parser.add_argument(
        "-s",
        "--statistics_file",
        nargs="?",
        type=Path,
        default=None,
        help="statistics file to read (default: latest *_statistics*.jld2 in data_dir)",
    )
    parser.add_argument(
        "-od",
        "--output_dir",
        nargs="?",
        type=Path,
        default=output_dir,
        help="directory in which output_data should be stored",
    )
    parser.add_argument(
        "--alpha",
        nargs="?",
        type=float,
        default=None,
        help="thermal expansion coefficient (1/K)",
    )
    parser.add_argument(
        "-g",
        "--g",
        nargs="?",
        type=float,
        default=None,
        help="gravitational acceleration (m/s^2)",
    )
    parser.add_argument(
        "-Lz",
        "--Lz",
        nargs="?",
        type=float,
        default=None,
        help="domain depth (m) used for the boundary distance",
    )
    parser.add_argument(
        "--halo",
        nargs="?",
        type=int,
        default=None,
        help="number of halo points stored at each end of a profile, read from the archive by default",
    )
    parser.add_argument(
        "--no_plot",
        action="store_true",
        help="only save the diagnostics, do not plot",
    )
    args = parser.parse_args()

    if globals.headless:
        print("No display available, plots are saved but not shown")

    scripts.run_mixing_length_analysis.main(
        args.data_dir,
        args.output_dir,
        args.statistics_file,
        args.alpha,
        args.g,
        args.Lz,
        args.halo,
        not args.no_plot,
    )
