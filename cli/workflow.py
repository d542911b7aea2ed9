#!/usr/bin/env python3
"""
CLI for workflow graph validation, dry-run simulation, export and templates
"""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

# allow running as a script from the repo root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from core.runtime.graph_info import load_and_validate
from workflow_graph.exchange import export_workflow
from workflow_graph.ids import SequentialIdGenerator
from workflow_graph.schema import SimulationResult, ValidationResult
from workflow_graph.templates import WORKFLOW_TEMPLATES, get_template, instantiate_template
from workflow_graph.toposort import simulate_workflow
from workflow_graph.visualize import draw_workflow

load_dotenv()

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()],
    )


def print_validation(result: ValidationResult):
    if result.valid:
        print("✅ Workflow is valid")
        return
    print("❌ Workflow has problems")
    for cycle in result.cycles:
        print(f"   Cycle: {' -> '.join(cycle)}")
    if result.orphaned_node_ids:
        print(f"   Orphaned nodes: {result.orphaned_node_ids}")


def print_simulation(result: SimulationResult):
    if not result.success:
        print(f"❌ {result.error}")
        return
    print(f"✅ {len(result.order)} node(s) in {len(result.steps)} step(s)")
    for step in result.steps:
        print(f"   Step {step.step_index}: {', '.join(step.node_ids)}")


def _emit(payload: Dict[str, Any]):
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def cmd_validate(args) -> int:
    info = load_and_validate(args.file)
    if args.json:
        _emit(info.validation.to_dict())
    else:
        print(f"Start nodes: {info.start_nodes}")
        print_validation(info.validation)
    return 0 if info.validation.valid else 1


def cmd_simulate(args) -> int:
    info = load_and_validate(args.file)
    result = simulate_workflow(info.nodes, info.edges)
    if args.json:
        _emit(result.to_dict())
    else:
        print_simulation(result)
    return 0 if result.success else 1


def _write_or_print(content: str, output: Optional[str]):
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(content)
        print(f"✅ Saved: {output}")
    else:
        print(content)


def cmd_export(args) -> int:
    info = load_and_validate(args.file)
    _write_or_print(export_workflow(info.nodes, info.edges), args.output)
    return 0


def cmd_templates(args) -> int:
    if args.json:
        _emit({"templates": [t.summary() for t in WORKFLOW_TEMPLATES]})
        return 0
    for t in WORKFLOW_TEMPLATES:
        print(f"{t.id:<24} {t.name} ({len(t.nodes)} nodes) - {t.description}")
    return 0


def cmd_template(args) -> int:
    template = get_template(args.template_id)
    if template is None:
        print(f"❌ Unknown template: {args.template_id}")
        return 1
    nodes, edges = instantiate_template(
        template, id_generator=SequentialIdGenerator(prefix=args.prefix)
    )
    _write_or_print(export_workflow(nodes, edges), args.output)
    return 0


def cmd_render(args) -> int:
    info = load_and_validate(args.file)
    simulation = simulate_workflow(info.nodes, info.edges)
    ok = draw_workflow(info.nodes, info.edges, args.output, info.validation, simulation)
    if ok:
        print(f"✅ Rendered: {args.output}")
    return 0 if ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Workflow graph tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli/workflow.py validate workflow.json
  python cli/workflow.py --json simulate workflow.json
  python cli/workflow.py template dual-trigger-pipeline -o pipeline.json
  python cli/workflow.py render workflow.json -o workflow.png
        """
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')
    parser.add_argument('--json', action='store_true', help='Print results as JSON')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('validate', help='Detect cycles and orphaned nodes')
    p.add_argument('file', help='Workflow JSON file')
    p.set_defaults(func=cmd_validate)

    p = sub.add_parser('simulate', help='Dry-run execution order')
    p.add_argument('file', help='Workflow JSON file')
    p.set_defaults(func=cmd_simulate)

    p = sub.add_parser('export', help='Re-export a workflow in the versioned envelope')
    p.add_argument('file', help='Workflow JSON file')
    p.add_argument('--output', '-o', help='Output path (default: stdout)')
    p.set_defaults(func=cmd_export)

    p = sub.add_parser('templates', help='List starter templates')
    p.set_defaults(func=cmd_templates)

    p = sub.add_parser('template', help='Instantiate a starter template')
    p.add_argument('template_id', help='Template id')
    p.add_argument('--prefix', default=os.getenv("WORKFLOW_TEMPLATE_ID_PREFIX", "tpl_"),
                   help='Prefix for generated ids')
    p.add_argument('--output', '-o', help='Output path (default: stdout)')
    p.set_defaults(func=cmd_template)

    p = sub.add_parser('render', help='Draw the workflow to an image')
    p.add_argument('file', help='Workflow JSON file')
    p.add_argument('--output', '-o', default='workflow.png', help='Image path')
    p.set_defaults(func=cmd_render)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function"""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        return args.func(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        print(f"❌ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
