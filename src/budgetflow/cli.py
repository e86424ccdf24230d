"""
Command-line interface for BudgetFlow.
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys

from budgetflow import __version__
from budgetflow.core.aggregator import BudgetView
from budgetflow.core.space import load_space
from budgetflow.diagram import DiagramOptions, build_cash_flow_diagram
from budgetflow.summary import budget_summary, group_summary


def _save_json(path: str, data: dict) -> None:
    """Save data as JSON to file path ('-' for stdout)."""
    if path == "-":
        json.dump(data, sys.stdout, indent=2)
        sys.stdout.write("\n")
        return
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def _json_number(value: float) -> float | None:
    return None if isinstance(value, float) and math.isnan(value) else value


def cmd_example(_) -> int:
    """Print a minimal Space document."""
    example = {
        "id": "space_demo",
        "title": "Household",
        "config": {"timeWindow": {"type": "month", "interval": 1}, "currency": "USD"},
        "incomes": [
            {
                "id": "salary",
                "label": "Salary",
                "amount": 2400.0,
                "cadence": {"type": "week", "interval": 2},
                "source": "Job",
                "type": "Salary",
            },
            {
                "id": "tutoring",
                "label": "Tutoring",
                "amount": 150.0,
                "cadence": {"type": "week", "interval": 1},
                "source": "Side work",
            },
        ],
        "expenses": [
            {
                "id": "rent",
                "label": "Rent",
                "amount": 1800.0,
                "cadence": {"type": "month", "interval": 1},
                "category": "Housing",
            },
            {
                "id": "groceries",
                "label": "Groceries",
                "amount": 120.0,
                "cadence": {"type": "week", "interval": 1},
                "category": "Food",
                "subCategory": "Groceries",
            },
            {
                "id": "insurance",
                "label": "Car insurance",
                "amount": 900.0,
                "cadence": {"type": "year", "interval": 1},
                "category": "Transportation",
                "hidden": True,
            },
        ],
    }
    json.dump(example, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def cmd_graph(args) -> int:
    """Build the cash-flow diagram for a Space and write nodes/edges as JSON."""
    try:
        view = BudgetView.from_space(load_space(args.input))
        options = DiagramOptions(
            hide_sources=args.hide_sources,
            hide_categories=args.hide_categories,
            list_expenses=args.list_expenses,
        )
        graph = build_cash_flow_diagram(view, options)
        _save_json(args.output, graph.to_dict())
        if args.output != "-":
            print(
                f"Wrote {len(graph.nodes)} nodes and {len(graph.edges)} edges "
                f"to {args.output}"
            )
        return 0
    except Exception as e:
        print(f"Error building graph: {e}", file=sys.stderr)
        return 1


def cmd_summary(args) -> int:
    """Print totals and per-group breakdowns for a Space."""
    try:
        view = BudgetView.from_space(load_space(args.input))
        headline = budget_summary(view)
        incomes = group_summary(view.income_by_source, view.income_source_hidden)
        expenses = group_summary(
            view.expense_by_category, view.expense_category_hidden
        )

        if args.json:
            output = {key: _json_number(value) for key, value in headline.items()}
            output["income_by_source"] = json.loads(incomes.to_json(orient="index"))
            output["expense_by_category"] = json.loads(
                expenses.to_json(orient="index")
            )
            json.dump(output, sys.stdout, indent=2)
            sys.stdout.write("\n")
        else:
            print(f"Time window: {headline['window']}")
            print(f"Incomes:  {headline['incomes_total']:,.2f}")
            print(f"Expenses: {headline['expenses_total']:,.2f}")
            print(f"Net:      {headline['net']:,.2f}")
            print()
            for title, frame in (("Income sources", incomes), ("Categories", expenses)):
                print(f"{title}:")
                if frame.empty:
                    print("  (none)")
                for key, row in frame.iterrows():
                    marker = " (hidden)" if row["all_hidden"] else ""
                    print(
                        f"  {key}: {row['total']:,.2f} "
                        f"of {row['complete_total']:,.2f}{marker}"
                    )
                print()
        return 0
    except Exception as e:
        print(f"Error summarizing space: {e}", file=sys.stderr)
        return 1


def cmd_lookup(args) -> int:
    """Show one item and its normalized amount by id."""
    try:
        view = BudgetView.from_space(load_space(args.input))
        result = view.get_item(args.id)
        if result.item is None:
            print(f"No item with id '{args.id}'", file=sys.stderr)
            return 1
        output = result.item.item.to_dict()
        output.update(
            {
                "kind": result.kind,
                "normalizedAmount": result.item.amount,
                "timeWindow": view.window.to_dict(),
            }
        )
        json.dump(output, sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 0
    except Exception as e:
        print(f"Error looking up item: {e}", file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="budgetflow", description="BudgetFlow - recurring budget cash-flow engine"
    )
    parser.add_argument(
        "--version", action="version", version=f"BudgetFlow {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(
        dest="cmd", required=True, help="Available commands"
    )

    example_parser = subparsers.add_parser(
        "example", help="Print a minimal Space JSON document"
    )
    example_parser.set_defaults(func=cmd_example)

    graph_parser = subparsers.add_parser(
        "graph", help="Build the cash-flow diagram nodes and edges as JSON"
    )
    graph_parser.add_argument(
        "-i", "--input", required=True, help="Input Space file (YAML or JSON)"
    )
    graph_parser.add_argument(
        "-o", "--output", default="-", help="Output JSON file (default: stdout)"
    )
    graph_parser.add_argument(
        "--hide-sources",
        action="store_true",
        help="Connect income items straight to the core",
    )
    graph_parser.add_argument(
        "--hide-categories",
        action="store_true",
        help="Connect expense items straight to the core",
    )
    graph_parser.add_argument(
        "--list-expenses",
        action="store_true",
        help="Show expense categories only, evenly spaced",
    )
    graph_parser.set_defaults(func=cmd_graph)

    summary_parser = subparsers.add_parser(
        "summary", help="Print totals per source and category"
    )
    summary_parser.add_argument(
        "-i", "--input", required=True, help="Input Space file (YAML or JSON)"
    )
    summary_parser.add_argument(
        "--json", action="store_true", help="Output in JSON format"
    )
    summary_parser.set_defaults(func=cmd_summary)

    lookup_parser = subparsers.add_parser("lookup", help="Show a single item by id")
    lookup_parser.add_argument(
        "-i", "--input", required=True, help="Input Space file (YAML or JSON)"
    )
    lookup_parser.add_argument("id", help="Item id")
    lookup_parser.set_defaults(func=cmd_lookup)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
