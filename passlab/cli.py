"""CLI for PassLab: analyze, estimate, scenarios, wordlist, config."""

import argparse
import json
import logging
import sys
from getpass import getpass

from rich import print
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import DEFAULTS, config_path, load_config, save_config
from .crack_time import SCENARIOS, custom_scenario, estimate, get_scenario
from .evaluator import AnalysisEngine
from .models import Severity, StrengthCategory
from .wordlist import WordlistStore

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'

CATEGORY_STYLES = {
    StrengthCategory.VERY_WEAK: "bold red",
    StrengthCategory.WEAK: "red",
    StrengthCategory.FAIR: "yellow",
    StrengthCategory.STRONG: "bold green",
}

SEVERITY_STYLES = {
    Severity.INFO: "cyan",
    Severity.WARNING: "yellow",
    Severity.CRITICAL: "bold red",
}

METER_WIDTH = 20


def _meter(value: float) -> str:
    filled = int(round(value * METER_WIDTH))
    return "█" * filled + "░" * (METER_WIDTH - filled)


def _engine_for(args) -> AnalysisEngine:
    # a hand-edited config may hold "no" or 0; only a real true enables it
    use_wordlist = args.wordlist if args.wordlist is not None else args.config.get("use_wordlist") is True
    if not use_wordlist:
        return AnalysisEngine()
    path = args.wordlist_path or args.config.get("wordlist_path")
    return AnalysisEngine(wordlist=WordlistStore(path))


def _scenarios_for(args):
    """Raises KeyError / ValueError for a bad --scenario / --rate."""
    if args.rate is not None:
        return [custom_scenario(args.rate)]
    sid = args.scenario or args.config.get("default_scenario")
    if sid:
        return [get_scenario(sid)]
    return list(SCENARIOS.values())


def _error(message: str) -> int:
    print(f"[red]{escape(message)}[/red]")
    return 2


def cmd_analyze(args):
    try:
        scenarios = _scenarios_for(args)
    except KeyError as e:
        return _error(e.args[0])
    except ValueError as e:
        return _error(str(e))

    pw = args.password
    if pw is None:
        pw = getpass("Password to analyze (input hidden): ")
    result = _engine_for(args).analyze(pw)
    estimates = [(s, estimate(result.entropy_bits, s)) for s in scenarios]

    if args.json:
        out = result.to_dict()
        out["estimates"] = {s.id: e.to_dict() for s, e in estimates}
        sys.stdout.write(json.dumps(out, ensure_ascii=False, indent=2) + "\n")
        return 0

    style = CATEGORY_STYLES[result.category]
    header = f"[{style}]{result.category.value}[/{style}]"
    body = (
        f"Length: {result.password_length} characters\n"
        f"Estimated entropy: {result.entropy_bits:.1f} bits\n"
        f"Meter: [{style}]{_meter(result.meter_value)}[/{style}] {result.meter_value * 100:.0f}%"
    )
    print(Panel(body, title=header))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Component")
    table.add_column("Bits", justify="right")
    for c in result.breakdown:
        table.add_row(escape(c.label), f"{c.bits:+.1f}")
    print(table)

    if result.warnings:
        print("[bold]Warnings:[/bold]")
        for w in result.warnings:
            ws = SEVERITY_STYLES[w.severity]
            print(f" • [{ws}]{escape(w.title)}[/{ws}]: {escape(w.detail)}")

    times = Table(show_header=True, header_style="bold cyan")
    times.add_column("Scenario")
    times.add_column("Guesses/s", justify="right")
    times.add_column("Time to crack")
    for s, e in estimates:
        times.add_row(escape(s.title), f"{s.guesses_per_second:,.0f}", e.describe())
    print(times)
    return 0


def cmd_estimate(args):
    try:
        scenarios = _scenarios_for(args)
    except KeyError as e:
        return _error(e.args[0])
    except ValueError as e:
        return _error(str(e))
    for s in scenarios:
        e = estimate(args.bits, s)
        print(f"[bold]{escape(s.title)}:[/bold] {e.describe()}")
    return 0


def cmd_scenarios(args):
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Guesses/s", justify="right")
    table.add_column("Notes")
    for s in SCENARIOS.values():
        table.add_row(s.id, s.title, f"{s.guesses_per_second:,.0f}", s.footnote or "")
    print(table)
    return 0


def cmd_wordlist(args):
    store = WordlistStore(args.path or args.config.get("wordlist_path"))
    _, count = store.load_words()
    if count == 0:
        print(f"[yellow]No word list available at {escape(store.path)}[/yellow]")
        return 0
    print(f"[green]{count:,} words[/green] loaded from {escape(store.path)}")
    return 0


def _parse_setting(raw: str):
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def cmd_config(args):
    cfg = args.config
    if args.set:
        for item in args.set:
            key, sep, raw = item.partition("=")
            if not sep or key not in DEFAULTS:
                return _error(f"Invalid setting '{item}' (keys: {', '.join(DEFAULTS)})")
            value = _parse_setting(raw)
            if isinstance(DEFAULTS[key], bool) and not isinstance(value, bool):
                return _error(f"Setting '{key}' must be true or false")
            cfg[key] = value
        save_config(cfg)
        logger.info("Saved settings to %s", config_path())
        print(f"[green]Saved settings to[/green] {escape(config_path())}")
    print(f"[bold]Config file:[/bold] {escape(config_path())}")
    for key, value in cfg.items():
        print(f" • {escape(key)} = {escape(json.dumps(value))}")
    return 0


def _add_scenario_args(p):
    g = p.add_mutually_exclusive_group()
    g.add_argument("--scenario", "-s", type=str, help=f"Attack scenario ({', '.join(SCENARIOS)})")
    g.add_argument("--rate", type=float, help="Custom attacker speed in guesses per second")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="passlab", description="Offline password strength analysis")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    an = sub.add_parser("analyze", help="Analyze a password (prompts when none is given)")
    an.add_argument("password", nargs="?", default=None, help="Password to evaluate (wrap in quotes)")
    _add_scenario_args(an)
    an.add_argument("--wordlist", dest="wordlist", action="store_true", default=None,
                    help="Also estimate dictionary-word passwords using the word list")
    an.add_argument("--no-wordlist", dest="wordlist", action="store_false", default=None,
                    help="Skip the word-list estimate even if enabled in config")
    an.add_argument("--wordlist-path", type=str, help="Word list file (one word per line)")
    an.add_argument("--json", action="store_true", help="Print the result as JSON")
    an.set_defaults(func=cmd_analyze)

    est = sub.add_parser("estimate", help="Estimate crack time for a number of entropy bits")
    est.add_argument("bits", type=float, help="Entropy in bits")
    _add_scenario_args(est)
    est.set_defaults(func=cmd_estimate)

    sc = sub.add_parser("scenarios", help="List attack scenarios")
    sc.set_defaults(func=cmd_scenarios)

    wl = sub.add_parser("wordlist", help="Show word list statistics")
    wl.add_argument("--path", type=str, help="Word list file (defaults to the bundled list)")
    wl.set_defaults(func=cmd_wordlist)

    cf = sub.add_parser("config", help="Show or change settings")
    cf.add_argument("--set", action="append", metavar="KEY=VALUE", help="Change a setting (repeatable)")
    cf.set_defaults(func=cmd_config)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    args.config = load_config()

    level = "DEBUG" if args.verbose else str(args.config.get("log_level") or "WARNING").upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format=LOG_FORMAT)

    return args.func(args)

if __name__ == "__main__":
    sys.exit(main())
