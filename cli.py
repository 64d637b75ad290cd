"""
Command-line front end: compresses or decompresses one file with the
chosen algorithm and optionally reports timing and space savings.

    lzw-compress -a lzw --stats compress input.txt -o input.txt.cmp
    lzw-compress -a lzw decompress input.txt.cmp -o recovered.txt
"""
import argparse
import sys
from importlib.metadata import PackageNotFoundError, version

from algorithms.LZW import LZWCompressor, LZWError

try:
    __version__ = version("lzw-stream-compressor")
except PackageNotFoundError:
    # running from a source checkout that was never installed
    __version__ = "unknown"

ALGORITHMS = {
    "lzw": LZWCompressor,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lzw-compress",
        description="Compress or decompress files with a dictionary coder.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-a", "--algorithm", required=True, choices=sorted(ALGORITHMS),
        help="algorithm used to compress or decompress",
    )
    parser.add_argument("--stats", action="store_true", help="show timing and space savings")
    parser.add_argument("--verbose", action="store_true", help="print the compressor log")

    subparsers = parser.add_subparsers(dest="action", required=True)
    for action in ("compress", "decompress"):
        sub = subparsers.add_parser(action, help=f"{action} a file")
        sub.add_argument("input", help=f"file to {action}")
        sub.add_argument("-o", "--output", required=True, help="output path")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    compressor = ALGORITHMS[args.algorithm]()
    run = compressor.compress_file if args.action == "compress" else compressor.decompress_file

    try:
        stats, log = run(args.input, args.output)
    except (OSError, EOFError, LZWError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(log)

    if args.stats:
        print("done.")
        print(f"    in {int(stats.elapsed * 1000)} ms")
        if args.action == "compress":
            print(f"    saved {stats.space_saved():.2f}%")

    return 0


if __name__ == "__main__":
    sys.exit(main())
