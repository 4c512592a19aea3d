"""
Compute Plan Command.

Runs the EOQ and MRP engines from the command line.

Usage:
    python manage.py compute_plan --sample Alpha
    python manage.py compute_plan --sample Skate --eoq 1000
    python manage.py compute_plan --file tree.json --orders 100 2:50 3:50
    python manage.py compute_plan --validate-graph graph.json --orders 100
"""

import json

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from domain.bom.aggregates import BOMGraph
from domain.bom.entities import BOMTreeNode
from domain.bom.samples import get_sample, get_sample_orders, sample_names
from domain.planning.entities import DemandSchedule, LEDGER_ROWS
from domain.planning.eoq import compute_eoq
from domain.planning.mrp import MAX_PLANNING_PERIODS, compute_mrp
from domain.shared.exceptions import DomainException


def parse_order_argument(value: str) -> dict:
    """``OFFSET:DEMAND`` or a bare ``DEMAND`` into a raw order record."""
    if ':' in value:
        offset, _, demand = value.partition(':')
        return {'offset': offset, 'demand': demand}
    return {'offset': 0, 'demand': value}


def _format_number(value) -> str:
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.2f}"
    return str(value)


class Command(BaseCommand):
    help = 'Compute EOQ and MRP plans for a BOM tree'

    def add_arguments(self, parser):
        parser.add_argument(
            '--file',
            type=str,
            help='Path to a BOM tree JSON file'
        )
        parser.add_argument(
            '--sample',
            type=str,
            help=f"Sample BOM name ({', '.join(sample_names())})"
        )
        parser.add_argument(
            '--eoq',
            type=int,
            metavar='DEMAND',
            help='Annual demand of the final product for the EOQ table'
        )
        parser.add_argument(
            '--orders',
            nargs='+',
            metavar='OFFSET:DEMAND',
            help='Demand orders for MRP; the first may be just DEMAND'
        )
        parser.add_argument(
            '--validate-graph',
            type=str,
            metavar='GRAPH.json',
            help='Validate a BOM graph file; when valid and no tree is given its tree is planned'
        )

    def handle(self, *args, **options):
        if options['file'] and options['sample']:
            raise CommandError('Use either --file or --sample, not both')

        tree = None
        if options['validate_graph']:
            tree = self._validate_graph(options['validate_graph'])

        if options['file']:
            tree = self._load_tree(options['file'])
        elif options['sample']:
            tree = get_sample(options['sample'])
            if tree is None:
                raise CommandError(
                    f"Unknown sample '{options['sample']}'. "
                    f"Available: {', '.join(sample_names())}"
                )

        if tree is None:
            if options['validate_graph']:
                return
            raise CommandError('A BOM is required: pass --file, --sample or a valid --validate-graph')

        self.stdout.write(self.style.SUCCESS(f"BOM: {tree.component_name}"))
        for node, depth in tree.walk_with_depth():
            self.stdout.write(f"{'  ' * depth}- {node.component_name} x{_format_number(node.multiplicity)}")
        self.stdout.write("")

        orders = options['orders']
        if orders:
            raw_orders = [parse_order_argument(value) for value in orders]
        elif options['sample'] and options['eoq'] is None:
            raw_orders = get_sample_orders(tree.component_name)
        else:
            raw_orders = []

        try:
            if options['eoq'] is not None:
                self._print_eoq(tree, options['eoq'])
            if raw_orders:
                self._print_mrp(tree, DemandSchedule.parse(raw_orders))
        except DomainException as e:
            raise CommandError(e.message)

    def _load_json(self, path):
        try:
            with open(path, encoding='utf-8') as fh:
                return json.load(fh)
        except OSError as e:
            raise CommandError(f"Cannot read {path}: {e}")
        except json.JSONDecodeError as e:
            raise CommandError(f"Invalid JSON in {path}: {e}")

    def _load_tree(self, path) -> BOMTreeNode:
        data = self._load_json(path)
        try:
            return BOMTreeNode.from_dict(data)
        except DomainException as e:
            raise CommandError(f"Invalid BOM tree in {path}: {e.message}")

    def _validate_graph(self, path):
        data = self._load_json(path)
        try:
            graph = BOMGraph.from_dict(data)
        except DomainException as e:
            raise CommandError(f"Invalid BOM graph in {path}: {e.message}")

        result = graph.validate()
        if not result.valid:
            self.stdout.write(self.style.ERROR(f"✗ {result.error}"))
            return None

        self.stdout.write(self.style.SUCCESS(f"✓ BOM graph is valid ({len(graph.nodes)} nodes)"))
        return graph.to_tree()

    def _print_eoq(self, tree, annual_demand):
        rows = compute_eoq(tree, annual_demand)
        self.stdout.write("=" * 80)
        self.stdout.write(self.style.SUCCESS(f"EOQ (annual demand {annual_demand})"))
        self.stdout.write("=" * 80)
        if not rows:
            self.stdout.write(self.style.WARNING("No EOQ rows: annual demand must be positive"))
            return

        self.stdout.write(
            f"{'Component':<16}{'Demand':>10}{'EOQ':>12}{'Orders/yr':>12}{'Days between':>14}"
        )
        for row in rows:
            self.stdout.write(
                f"{row.name:<16}{_format_number(row.demand):>10}"
                f"{row.eoq:>12.2f}{row.orders_per_year:>12.2f}{row.time_between_orders:>14.2f}"
            )
        self.stdout.write("")

    def _print_mrp(self, tree, schedule):
        result = compute_mrp(
            tree, schedule, getattr(settings, 'MAX_PLANNING_PERIODS', MAX_PLANNING_PERIODS)
        )
        self.stdout.write("=" * 80)
        self.stdout.write(self.style.SUCCESS(f"MRP (orders at periods {schedule.order_times()})"))
        self.stdout.write("=" * 80)

        header = f"{'Period':<14}" + "".join(f"{period:>9}" for period in result.periods)
        for name, entry in result.ordered_entries():
            self.stdout.write(
                self.style.MIGRATE_HEADING(
                    f"{name}  (on hand {entry.on_hand}, lead time {entry.lead_time})"
                )
            )
            self.stdout.write(header)
            table = entry.table.to_dict()
            for row in LEDGER_ROWS:
                cells = "".join(f"{_format_number(value):>9}" for value in table[row])
                self.stdout.write(f"{row:<14}{cells}")
            self.stdout.write(f"Total cost: {_format_number(entry.table.total_cost)}")
            self.stdout.write("")
