"""Command line driver.

Usage:
    python run.py -s <s> -E <E> -b <b> -t <tracefile> [-v]

Prints one summary line:
    hits:H misses:M evictions:E dirty_bytes_in_cache:D dirty_bytes_evicted:X
"""
import argparse
import logging
import sys
from typing import List, Optional, TextIO

from csim.data.stats_export import Exporter, SUMMARY_FIELDS, export_chart_json, export_chart_pdf
from csim.simulation.simulation import CacheConfig, ConfigError, Simulation
from csim.simulation.trace import TraceFormatError

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog='csim', description="Set-associative cache simulator (trace-driven)")
    ap.add_argument('-s', dest='set_bits', type=int, required=True, help="Number of set index bits (S = 2^s sets)")
    ap.add_argument('-E', dest='lines_per_set', type=int, required=True, help="Number of lines per set")
    ap.add_argument('-b', dest='block_bits', type=int, required=True, help="Number of block offset bits (B = 2^b bytes)")
    ap.add_argument('-t', dest='trace', required=True, help="Trace file: lines of 'L|S addr,size'")
    ap.add_argument('-v', dest='verbose', action='store_true', help="Print the outcome of every access")
    ap.add_argument('--csv', default=None, help="Path to write summary stats CSV")
    ap.add_argument('--json', default=None, help="Path to write hit-rate history and stats JSON")
    ap.add_argument('--chart', default=None, help="Path to write a hit-rate chart PDF")
    ap.add_argument('--results-file', default=None, help="Path to write the bare summary counters")
    ap.add_argument('--debug', action='store_true', help="Enable debug logging")
    return ap


def format_access(info: dict) -> str:
    words = ['hit' if info['hit'] else 'miss']
    if info['evicted']:
        words.append('eviction')
    return f"{info['op']} {info['address']:x},{info['size']} {' '.join(words)}"


def print_summary(summary: dict, file: Optional[TextIO] = None) -> None:
    out = file or sys.stdout
    out.write("hits:{hits} misses:{misses} evictions:{evictions} "
              "dirty_bytes_in_cache:{dirty_bytes} dirty_bytes_evicted:{dirty_evictions}\n".format(**summary))


def write_results_file(path: str, summary: dict) -> None:
    with open(path, 'w', encoding='utf-8') as fh:
        fh.write(' '.join(str(summary[k]) for k in SUMMARY_FIELDS) + '\n')


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                        format='%(levelname)s: %(message)s')

    config = CacheConfig(set_bits=args.set_bits, lines_per_set=args.lines_per_set,
                         block_bits=args.block_bits, trace_path=args.trace, verbose=args.verbose)
    callback = None
    if config.verbose:
        def callback(info):
            print(format_access(info))

    try:
        sim = Simulation(config, track_history=bool(args.json or args.chart))
        summary = sim.run(callback)
    except (ConfigError, TraceFormatError) as e:
        log.error("%s", e)
        return 1
    except OSError as e:
        log.error("cannot read trace %s: %s", config.trace_path, e)
        return 1

    print_summary(summary)

    try:
        if args.results_file:
            write_results_file(args.results_file, summary)
        if args.csv:
            Exporter.export_stats_csv(args.csv, sim.stats, config.block_bits)
        if args.json:
            export_chart_json(sim.sim.hit_rate_history, summary, args.json)
        if args.chart:
            export_chart_pdf(sim.sim.hit_rate_history, args.chart)
    except OSError as e:
        log.error("cannot write output: %s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
