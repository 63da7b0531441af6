#!/usr/bin/env python3
"""
Address Resolver CLI

Command-line interface for resolving addresses, querying city / street
suggestions and batch-resolving address files.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from address_resolver.address_loader import AddressLoader, resolve_rows, results_to_frame
from address_resolver.config_manager import ConfigManager, ResolverConfig
from address_resolver.export import GeoJSONExporter
from address_resolver.resolver import AddressResolver

DEFAULT_CONFIG = Path("config/resolver.yaml")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="address-resolver",
        description="Address Resolver - resolve addresses to coordinates from a local road dataset or Google",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Resolve a Georgian address against the local dataset
  %(prog)s resolve --country Georgia --city Tbilisi --street Rustaveli --house-number 12

  # Resolve any other address through Google
  %(prog)s resolve --country Armenia --city Yerevan --street Abovyan

  # City / street suggestions
  %(prog)s cities Tb
  %(prog)s streets Tbilisi Rus

  # Resolve a CSV of addresses
  %(prog)s batch addresses.csv --output resolved.csv

  # Write an example configuration
  %(prog)s init-config config/resolver.yaml
        """
    )

    parser.add_argument(
        '-c', '--config',
        type=Path,
        default=DEFAULT_CONFIG,
        help=f'Resolver configuration YAML file (default: {DEFAULT_CONFIG})'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Override the configured log level'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    resolve = subparsers.add_parser('resolve', help='Resolve a single address')
    resolve.add_argument('--country', required=True, help='Country name')
    resolve.add_argument('--city', required=True, help='City name')
    resolve.add_argument('--street', required=True, help='Street name')
    resolve.add_argument('--house-number', help='House number (optional)')
    resolve.add_argument(
        '--geojson',
        type=Path,
        help='Also write the result as a GeoJSON file'
    )

    cities = subparsers.add_parser('cities', help='Suggest city names')
    cities.add_argument('query', help='Start of the city name (2+ characters)')
    cities.add_argument('--country', help='Country (default: local_country.label from the config)')

    streets = subparsers.add_parser('streets', help='Suggest street names near a city')
    streets.add_argument('city', help='City name')
    streets.add_argument('query', help='Part of the street name (2+ characters)')
    streets.add_argument('--country', help='Country (default: local_country.label from the config)')

    batch = subparsers.add_parser('batch', help='Resolve every address in a CSV/Excel file')
    batch.add_argument('input_file', type=Path, help='CSV/Excel file with country, city, street[, house_number]')
    batch.add_argument(
        '-o', '--output',
        type=Path,
        help='Output CSV file (default: resolved_addresses_TIMESTAMP.csv)'
    )
    batch.add_argument(
        '--geojson',
        type=Path,
        help='Also write successful results as a GeoJSON file'
    )
    batch.add_argument('--no-progress', action='store_true', help='Hide the progress bar')

    init_config = subparsers.add_parser('init-config', help='Write an example configuration file')
    init_config.add_argument('output', type=Path, help='Where to write the YAML file')

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[%(levelname)s] %(message)s",
    )


def write_geojson(results, path: Path, labels: Optional[List[str]] = None) -> Path:
    exporter = GeoJSONExporter(path.parent)
    return exporter.export_results(results, output_name=path.name, labels=labels)


def cmd_resolve(resolver: AddressResolver, args) -> int:
    result = resolver.resolve(args.country, args.city, args.street, args.house_number)
    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))

    if args.geojson:
        label = f"{args.street} {args.house_number or ''}".strip() + f", {args.city}, {args.country}"
        output_path = write_geojson([result], args.geojson, labels=[label])
        print(f"✅ Wrote GeoJSON to {output_path}", file=sys.stderr)

    return 0 if result.success else 1


def cmd_batch(resolver: AddressResolver, args) -> int:
    addresses = AddressLoader().load(args.input_file)
    results = resolve_rows(resolver, addresses, show_progress=not args.no_progress)
    resolved = results_to_frame(addresses, results)

    if args.output:
        output_path = args.output
    else:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        output_path = Path(f'resolved_addresses_{timestamp}.csv')

    resolved.to_csv(output_path, index=False)
    succeeded = sum(r.success for r in results)
    print(f"✅ Resolved {succeeded}/{len(results)} addresses, results at {output_path}")

    if args.geojson:
        labels = [
            f"{row['street']} {row.get('house_number') or ''}".strip() + f", {row['city']}"
            for row in addresses.to_dict(orient="records")
        ]
        geojson_path = write_geojson(results, args.geojson, labels=labels)
        print(f"✅ Wrote GeoJSON to {geojson_path}")

    return 0


def load_config(path: Path) -> ResolverConfig:
    return ConfigManager(path).load()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == 'init-config':
        configure_logging(args.log_level or 'INFO')
        args.output.parent.mkdir(parents=True, exist_ok=True)
        ConfigManager().save_example_config(args.output)
        print(f"✅ Saved example configuration to {args.output}")
        return 0

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        print(f"   Create one with: address-resolver init-config {args.config}", file=sys.stderr)
        return 2

    configure_logging(args.log_level or config.log_level)
    resolver = AddressResolver.from_config(config)

    if args.command == 'resolve':
        return cmd_resolve(resolver, args)
    country = getattr(args, 'country', None) or config.country_label

    if args.command == 'cities':
        print(json.dumps(resolver.suggest_cities(args.query, country), ensure_ascii=False))
        return 0
    if args.command == 'streets':
        print(json.dumps(resolver.suggest_streets(args.city, args.query, country), ensure_ascii=False))
        return 0
    if args.command == 'batch':
        try:
            return cmd_batch(resolver, args)
        except (FileNotFoundError, ValueError) as e:
            print(f"❌ {e}", file=sys.stderr)
            return 2

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == '__main__':
    sys.exit(main())
