"""
Command-Line Interface for Rowgen

Provides commands for:
- generate: Generate rows from a JSON schema
- preview: Show a schema summary and a few sample rows
- config: Create a configuration file
"""

import argparse
import sys
import logging
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

# Import our modules
from rowgen.config import MAX_THREADS, Config, ConfigLoader, OutputMode, get_default_config
from rowgen.exceptions import RowgenError
from rowgen.generators import generate_header, generate_rows
from rowgen.orchestrator import generate_data
from rowgen.schema import load_schema_from_file
from rowgen.utils import SeedManager, setup_logging

# Status output goes to stderr; stdout carries generated rows in console mode
console = Console(stderr=True)

logger = logging.getLogger("rowgen.cli")


class CLI:
    """Main CLI class"""

    def __init__(self):
        self.parser = self._create_parser()
        self.config_loader = ConfigLoader()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser"""
        parser = argparse.ArgumentParser(
            description="Rowgen synthetic row generator CLI",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Print 1000 rows to stdout
  python cli.py generate schema.json -n 1000

  # Write 1M rows to a file using 4 threads
  python cli.py generate schema.json -n 1000000 -b 1000 -t 4 -o file -f out.csv

  # Stream to S3 as a multipart upload
  python cli.py generate schema.json -n 1000000 -o s3 -f my-bucket:data/out.csv

  # Preview a schema
  python cli.py preview schema.json -r 5
            """
        )

        parser.add_argument(
            '--verbose', '-v',
            action='store_true',
            help='Enable verbose output'
        )

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        # Generate command
        generate_parser = subparsers.add_parser('generate', help='Generate rows from a schema')
        generate_parser.add_argument('schema', help='JSON schema file')
        generate_parser.add_argument('--num-rows', '-n', type=int, help='Number of rows to generate')
        generate_parser.add_argument('--batch-size', '-b', type=int, help='Rows per batch')
        generate_parser.add_argument('--threads', '-t', type=int, help=f'Worker threads (max {MAX_THREADS})')
        generate_parser.add_argument('--output', '-o', help='Output mode: console, file, s3')
        generate_parser.add_argument('--output-file', '-f', help='Output path, or bucket:key for s3')
        generate_parser.add_argument('--header', action='store_true', help='Write a header row first')
        generate_parser.add_argument('--log-file', '-l', help='Also log to this file')
        generate_parser.add_argument('--seed', '-s', type=int, help='Random seed for reproducibility')
        generate_parser.add_argument('--config', '-c', help='YAML configuration file')

        # Preview command
        preview_parser = subparsers.add_parser('preview', help='Preview a schema')
        preview_parser.add_argument('schema', help='JSON schema file')
        preview_parser.add_argument('--rows', '-r', type=int, default=5, help='Number of sample rows')
        preview_parser.add_argument('--seed', '-s', type=int, help='Random seed for reproducibility')

        # Config command
        config_parser = subparsers.add_parser('config', help='Manage configurations')
        config_subparsers = config_parser.add_subparsers(dest='config_command')

        create_parser = config_subparsers.add_parser('create', help='Create a configuration file')
        create_parser.add_argument('output', help='Output configuration file')

        return parser

    def run(self, args=None):
        """Run CLI"""
        args = self.parser.parse_args(args)

        # Setup logging
        log_level = logging.DEBUG if args.verbose else logging.INFO
        setup_logging(level=log_level, log_file=getattr(args, 'log_file', None))

        # Execute command
        if args.command == 'generate':
            self.cmd_generate(args)
        elif args.command == 'preview':
            self.cmd_preview(args)
        elif args.command == 'config':
            self.cmd_config(args)
        else:
            self.parser.print_help()

    def build_config(self, args) -> Config:
        """Load the configuration and apply command-line overrides"""
        if args.config:
            config = self.config_loader.load_from_file(args.config)
            logger.info(f"Loaded configuration: {args.config}")
        else:
            config = get_default_config()

        generation = config.generation
        if args.num_rows is not None:
            generation.num_rows = args.num_rows
        if args.batch_size is not None:
            generation.batch_size = args.batch_size
        if args.threads is not None:
            generation.num_threads = args.threads
        if generation.num_threads > MAX_THREADS:
            logger.warning(
                f"Max number of threads is {MAX_THREADS}, using {MAX_THREADS} threads instead of {generation.num_threads}"
            )
            generation.num_threads = MAX_THREADS
        if args.seed is not None:
            generation.seed = args.seed
        if args.header:
            generation.display_header = True

        if args.output is not None:
            config.output.mode = OutputMode.parse(args.output)
        if args.output_file is not None:
            config.output.output_file = args.output_file
        if args.log_file is not None:
            config.logging.log_file = args.log_file

        return config

    def cmd_generate(self, args):
        """Generate rows"""
        console.print(Panel.fit(
            "[bold]Rowgen Data Generation[/bold]",
            border_style="blue"
        ))

        try:
            config = self.build_config(args)
            if args.config:
                # Logging settings from the file apply unless -v was given
                setup_logging(
                    level=logging.DEBUG if args.verbose else config.logging.level,
                    log_file=config.logging.log_file
                )
            schema = load_schema_from_file(args.schema)
            console.print(f"✓ Loaded schema '{schema.table_name}' with {len(schema.fields)} fields")

            summary = generate_data(config, schema)

            # Summary
            table = Table(title="Generation Summary", show_header=True)
            table.add_column("Metric", style="cyan")
            table.add_column("Value", style="green")

            table.add_row("Rows Generated", f"{summary.rows:,}")
            table.add_row("Batches", f"{summary.batches:,}")
            table.add_row("Threads", str(config.generation.num_threads))
            table.add_row("Seed", str(config.generation.seed if config.generation.seed is not None else "Random"))
            table.add_row("Output", config.output.mode.value)
            if config.output.output_file:
                table.add_row("Output File", config.output.output_file)
            table.add_row("Elapsed", f"{summary.elapsed:.2f}s")

            console.print(table)
            console.print("\n[bold green]✓ Generation complete![/bold green]")

        except (RowgenError, OSError) as e:
            logger.error(f"{e}")
            console.print(f"[bold red]✗ Error:[/bold red] {str(e)}")
            if args.verbose:
                console.print_exception()
            sys.exit(1)

    def cmd_preview(self, args):
        """Show the schema and a few sample rows"""
        console.print(Panel.fit(
            "[bold]Schema Preview[/bold]",
            border_style="cyan"
        ))

        try:
            schema = load_schema_from_file(args.schema)

            table = Table(title=f"Table: {schema.table_name}", show_header=True)
            table.add_column("Field", style="cyan")
            table.add_column("Type", style="yellow")
            table.add_column("Generator", style="green")
            table.add_column("Width", style="blue")
            table.add_column("Padding", style="magenta")

            for field in schema.fields:
                table.add_row(
                    field.name,
                    field.data_type,
                    field.generator.kind.value,
                    "" if field.length is None else str(field.length),
                    "" if field.padding is None else repr(field.padding),
                )

            console.print(table)
            delimiter = "fixed width" if schema.is_fixed_width else repr(schema.delimiter)
            console.print(f"Delimiter: {delimiter}")

            rng = SeedManager(args.seed).spawn(1)[0]
            console.print("\n[bold]Sample rows:[/bold]")
            console.print(generate_header(schema) + generate_rows(schema, rng, args.rows), end="", markup=False)

        except RowgenError as e:
            console.print(f"[bold red]✗ Error:[/bold red] {str(e)}")
            if args.verbose:
                console.print_exception()
            sys.exit(1)

    def cmd_config(self, args):
        """Manage configurations"""
        if args.config_command == 'create':
            config = get_default_config()
            self.config_loader.save_config(config, args.output)

            console.print(f"✓ Created configuration file: {args.output}")
            console.print("  Edit this file to customize settings")
        else:
            console.print("Use 'config create <file>'")


def main():
    """CLI entry point"""
    cli = CLI()
    cli.run()


if __name__ == "__main__":
    main()
