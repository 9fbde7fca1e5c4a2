"""Main entry point for the Sales Task Analytics Engine."""

import argparse
import json
import logging
import sys
from pathlib import Path

from task_analytics.engine import derive_all, filter_tasks
from task_analytics.ingest import SalesTaskGenerator, load_tasks, tasks_to_records
from task_analytics.reporting import build_report
from task_analytics.utils.config import resolve_config

logger = logging.getLogger(__name__)


def _generate(config: dict, count: int = None):
    gen_config = config.get('generator', {})
    generator = SalesTaskGenerator(seed=gen_config.get('seed', 42), config=config)
    return generator.generate(count)


def run_analysis(
    config_path: str,
    tasks_path: str = None,
    output_format: str = "text",
    output_path: str = None,
    status: str = None,
    priority: str = None,
    search: str = None,
):
    """Load tasks, apply filters and print the analytics report."""
    config = resolve_config(config_path)

    tasks = load_tasks(tasks_path) if tasks_path else []
    if not tasks:
        logger.info("No tasks loaded, using generated seed tasks")
        tasks = _generate(config)

    if status or priority or search:
        kept = filter_tasks(derive_all(tasks), search=search, status=status, priority=priority)
        tasks = [d.task for d in kept]
        logger.info("Filters kept %d tasks", len(tasks))

    report = build_report(tasks, config)

    if output_format == "json":
        rendered = json.dumps(report.to_dict(), indent=2, default=str)
    else:
        rendered = report.to_human_readable()

    if output_path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            f.write(rendered)
        print(f"Report saved to: {path}")
    else:
        print(rendered)

    return report


def run_generate(config_path: str, output_path: str, count: int = None):
    """Write generated seed tasks to a JSON file."""
    config = resolve_config(config_path)
    tasks = _generate(config, count)

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(tasks_to_records(tasks), f, indent=2)

    print(f"Generated {len(tasks)} tasks")
    print(f"Tasks saved to: {path}")
    return tasks


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Sales Task Analytics Engine"
    )
    parser.add_argument(
        'command',
        choices=['analyze', 'generate-tasks'],
        help='Command to run'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '--tasks',
        type=str,
        help='JSON file of task records (default: generated seed tasks)'
    )
    parser.add_argument(
        '--format',
        choices=['text', 'json'],
        default='text',
        help='Report format (default: text)'
    )
    parser.add_argument(
        '--output',
        type=str,
        help='Write the report or generated tasks to this path'
    )
    parser.add_argument('--status', type=str, help='Only analyze tasks with this status')
    parser.add_argument('--priority', type=str, help='Only analyze tasks with this priority')
    parser.add_argument('--search', type=str, help='Only analyze tasks whose title contains this text')
    parser.add_argument('--count', type=int, help='Number of tasks to generate')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == 'analyze':
            run_analysis(
                args.config,
                tasks_path=args.tasks,
                output_format=args.format,
                output_path=args.output,
                status=args.status,
                priority=args.priority,
                search=args.search,
            )
        elif args.command == 'generate-tasks':
            run_generate(args.config, args.output or 'results/generated_tasks.json', args.count)
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
