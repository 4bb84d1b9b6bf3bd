#!/usr/bin/env python3

"""
Calculate maximum cardinality matching of graphs.

Graphs are read either in plain format or in DIMACS edge format.

Plain format: whitespace-separated integers; the number of vertices,
the number of edges, followed by one pair of 0-based vertex indices
per edge. Plain output lists each input edge as "x y 1" if the edge
is matched, or "x y 0" if it is not.
"""

from __future__ import annotations

import sys
import argparse
import os
import os.path
from typing import Optional, TextIO

from mcmatching import Graph, find_maximum_matching


def read_plain_graph(f: TextIO) -> tuple[int, list[tuple[int, int]]]:
    """Read a graph in plain format.

    Returns:
        Tuple (num_vertex, edges).
    """

    words = f.read().split()
    try:
        values = [int(w) for w in words]
    except ValueError as exc:
        raise ValueError(f"Expecting integer ({exc})") from None

    if len(values) < 2:
        raise ValueError("Missing vertex count or edge count")

    (num_vertex, num_edge) = values[:2]
    if num_vertex < 1:
        raise ValueError(f"Invalid vertex count {num_vertex}")
    if num_edge < 0:
        raise ValueError(f"Invalid edge count {num_edge}")
    if len(values) != 2 + 2 * num_edge:
        raise ValueError(
            f"Expecting {num_edge} edges but got"
            f" {(len(values) - 2) / 2:g}")

    edges: list[tuple[int, int]] = []
    for i in range(num_edge):
        x = values[2 + 2 * i]
        y = values[3 + 2 * i]
        if not ((0 <= x < num_vertex) and (0 <= y < num_vertex)):
            raise ValueError(f"Invalid edge ({x}, {y})")
        edges.append((x, y))

    return (num_vertex, edges)


def read_dimacs_graph(f: TextIO) -> tuple[int, list[tuple[int, int]]]:
    """Read a graph in DIMACS edge list format.

    Edge weights are allowed but ignored.

    Returns:
        Tuple (num_vertex, edges).
    """

    num_vertex = -1
    edges: list[tuple[int, int]] = []

    for line in f:
        s = line.strip()
        words = s.split()

        if not words:
            # Skip empty line.
            continue

        if words[0].startswith("c"):
            # Skip comment line.
            pass

        elif words[0] == "p":
            # Handle "problem" line.
            if len(words) != 4:
                raise ValueError(
                    f"Expecting DIMACS edge format but got {s!r}")
            if words[1] != "edge":
                raise ValueError(
                    f"Expecting DIMACS edge format but got {words[1]!r}")
            num_vertex = int(words[2])

        elif words[0] == "e":
            # Handle "edge" line.
            if len(words) not in (3, 4):
                raise ValueError(f"Expecting edge but got {s!r}")
            x = int(words[1])
            y = int(words[2])
            if (x < 1) or (y < 1):
                raise ValueError(f"Invalid vertex index {s!r}")
            edges.append((x - 1, y - 1))

        else:
            raise ValueError(f"Unknown line type {words[0]!r}")

    if num_vertex < 0:
        raise ValueError("Missing problem line")

    for (x, y) in edges:
        if max(x, y) >= num_vertex:
            raise ValueError(f"Invalid vertex index {max(x, y) + 1}")

    return (num_vertex, edges)


def read_graph_file(
        filename: str,
        dimacs: bool
        ) -> tuple[int, list[tuple[int, int]]]:
    """Read a graph from file or stdin."""
    reader = read_dimacs_graph if dimacs else read_plain_graph
    if filename:
        with open(filename, "r", encoding="ascii") as f:
            try:
                return reader(f)
            except ValueError as exc:
                raise ValueError(f"{exc} in {filename!r}") from None
    else:
        try:
            return reader(sys.stdin)
        except ValueError as exc:
            raise ValueError(f"{exc} in (stdin)") from None


def read_plain_matching(f: TextIO) -> list[tuple[int, int, bool]]:
    """Read a matching in plain output format.

    Returns:
        List of edges "(x, y, matched)" in input order.
    """

    result: list[tuple[int, int, bool]] = []

    for line in f:
        words = line.split()

        if not words:
            # Skip empty line.
            continue

        if len(words) != 3 or words[2] not in ("0", "1"):
            raise ValueError(f"Expecting matched edge but got {line!r}")

        result.append((int(words[0]), int(words[1]), words[2] == "1"))

    return result


def read_dimacs_matching(f: TextIO) -> tuple[int, list[tuple[int, int]]]:
    """Read a matching solution in DIMACS format."""

    have_size = False
    size = 0
    pairs: list[tuple[int, int]] = []

    for line in f:
        s = line.strip()
        words = s.split()

        if not words:
            # Skip empty line.
            continue

        if words[0].startswith("c"):
            # Skip comment line.
            pass

        elif words[0] == "s":
            # Handle "solution" line.
            if len(words) != 2:
                raise ValueError(
                    f"Expecting solution line but got {s!r}")
            if have_size:
                raise ValueError("Duplicate solution line")
            have_size = True
            size = int(words[1])

        elif words[0] == "m":
            # Handle "matching" line.
            if len(words) != 3:
                raise ValueError(
                    f"Expecting matched edge but got {s!r}")
            x = int(words[1])
            y = int(words[2])
            if (x < 1) or (y < 1):
                raise ValueError(f"Invalid vertex index {s!r}")
            pairs.append((x - 1, y - 1))

        else:
            raise ValueError(f"Unknown line type {words[0]!r}")

    if not have_size:
        raise ValueError("Missing solution line")

    return (size, pairs)


def read_matching_size_file(filename: str, dimacs: bool) -> int:
    """Read a matching from file and return its cardinality."""
    with open(filename, "r", encoding="ascii") as f:
        try:
            if dimacs:
                (size, _pairs) = read_dimacs_matching(f)
                return size
            else:
                return sum(1 for (_x, _y, m) in read_plain_matching(f) if m)
        except ValueError as exc:
            raise ValueError(f"{exc} in {filename!r}") from None


def write_plain_matching(f: TextIO, graph: Graph) -> None:
    """Write the matching flag of each edge in plain format."""
    for (e, (x, y)) in enumerate(graph.edges):
        print(x, y, 1 if graph.edge_matched[e] else 0, file=f)


def write_dimacs_matching(f: TextIO, graph: Graph) -> None:
    """Write a matching solution in DIMACS format."""
    print("s", graph.matching_size(), file=f)
    for (x, y) in graph.pairs():
        print("m", x + 1, y + 1, file=f)


def write_matching_file(filename: str, graph: Graph, dimacs: bool) -> None:
    """Write a matching to file or stdout."""
    writer = write_dimacs_matching if dimacs else write_plain_matching
    if filename:
        with open(filename, "x", encoding="ascii") as f:
            writer(f, graph)
    else:
        writer(sys.stdout, graph)


def generate_matching(
        input_filename: str,
        output_filename: str,
        dimacs: bool
        ) -> None:
    """Calculate matching of one graph instance."""

    (num_vertex, edges) = read_graph_file(input_filename, dimacs)

    graph = Graph(num_vertex, edges)
    find_maximum_matching(graph)

    write_matching_file(output_filename, graph, dimacs)


def run_generate(
        filenames: list[str],
        outdir: Optional[str],
        dimacs: bool
        ) -> int:
    """Calculate matching(s) and write output to disk or stdout."""

    if len(filenames) == 0:
        # Read from stdin; write to stdout.
        generate_matching("", "", dimacs)

    elif not outdir:
        # Read from file, write to stdout.
        assert len(filenames) == 1
        generate_matching(filenames[0], "", dimacs)

    else:
        # Read from file, write to file.
        for filename in filenames:
            output_filename = os.path.join(
                outdir,
                os.path.splitext(os.path.basename(filename))[0] + ".out")
            print(f"Processing {filename!r} -> {output_filename!r} ...",
                  end=" ")
            sys.stdout.flush()

            generate_matching(filename, output_filename, dimacs)

            print(" OK")
            sys.stdout.flush()

    return 0


def verify_matching(filename: str, dimacs: bool) -> bool:
    """Verify matching of one graph instance."""

    print("Verifying", repr(filename), "...", end=" ")
    sys.stdout.flush()

    matching_filename = os.path.splitext(filename)[0] + ".out"

    (num_vertex, edges) = read_graph_file(filename, dimacs)
    gold_size = read_matching_size_file(matching_filename, dimacs)

    graph = Graph(num_vertex, edges)
    find_maximum_matching(graph)
    size = graph.matching_size()

    if size != gold_size:
        print(f"FAILED (got {size} pairs, expected {gold_size})")
        return False

    print("OK")
    return True


def run_verify(filenames: list[str], dimacs: bool) -> int:
    """Verify matching(s)."""

    num_passed = 0
    failed_tests: list[str] = []

    for filename in filenames:
        if verify_matching(filename, dimacs):
            num_passed += 1
        else:
            failed_tests.append(filename)
        sys.stdout.flush()

    print("done.")
    print(num_passed, "tests passed")
    if failed_tests:
        print(len(failed_tests), "tests failed:")
        for filename in failed_tests:
            print("   ", filename, "FAILED")
    else:
        print("All tests passed")
    sys.stdout.flush()

    return 1 if failed_tests else 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main program."""

    parser = argparse.ArgumentParser()
    parser.description = (
        "Calculate maximum cardinality matching of graphs.")

    parser.add_argument("--verify",
                        action="store_true",
                        help="verify existing output file(s)")
    parser.add_argument("--dimacs",
                        action="store_true",
                        help="read and write DIMACS format")
    parser.add_argument("--outdir",
                        action="store",
                        type=str,
                        help="directory to write output")
    parser.add_argument("input",
                        nargs="*",
                        help="input file(s); leave empty to read from stdin")

    args = parser.parse_args(argv)

    if (not args.input) and os.isatty(sys.stdin.fileno()):
        print("ERROR: Expecting input from stdin but stdin is a terminal",
              file=sys.stderr)
        print(file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    if (not args.input) and args.verify:
        print("ERROR: Can not verify when reading from stdin",
              file=sys.stderr)
        return 1

    if len(args.input) > 1 and (not args.verify) and (not args.outdir):
        print("ERROR: Need --outdir or --verify to process multiple inputs",
              file=sys.stderr)
        return 1

    try:
        if args.verify:
            return run_verify(args.input, args.dimacs)
        else:
            return run_generate(args.input, args.outdir, args.dimacs)
    except (OSError, ValueError) as exc:
        print("ERROR:", exc, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
