"""
Command-line front end for OntoAbstract.

Reads an OntoUML project (or an ``{"project": ..., "options": ...}`` request
body), abstracts one of its diagrams and writes ``{"result", "issues"}``.

Usage:
    ontoabstract project.json --diagram d1 --rule hierarchy -o abstracted.json
    ontoabstract request.json --element c_engine
"""

import argparse
import json
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from .services.abstraction import AbstractionOptions, AbstractionRule, abstract
from .shared import (
    get_logger, get_settings, setup_logging, AbstractionError, ModelGraphError, Project, ValidationError,
)


def load_request(path: Path) -> Tuple[Project, Dict[str, Any]]:
    """Parse a project file or a request body into a project and raw options."""
    try:
        with path.open("r", encoding="utf-8") as f:
            body = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValidationError(f"Cannot read {path}: {e}") from e

    if not isinstance(body, dict):
        raise ValidationError(f"{path} does not contain a JSON object")

    raw_project = body.get("project", body)
    raw_options = body.get("options") or {}
    try:
        return Project.model_validate(raw_project), dict(raw_options)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid project in {path}: {e}") from e


def build_options(raw: Dict[str, Any], args: argparse.Namespace) -> AbstractionOptions:
    """Command-line flags override options found in the request body."""
    if args.diagram:
        raw["activeDiagramId"] = args.diagram
    if args.element:
        raw["activeElementId"] = args.element
    if args.rule:
        raw["abstractionRule"] = args.rule
    try:
        return AbstractionOptions.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid abstraction options: {e}") from e


def abstract_command(args: argparse.Namespace) -> int:
    """Run one abstraction request."""
    logger = get_logger(__name__)
    try:
        project, raw_options = load_request(args.project)
        options = build_options(raw_options, args)
    except ValidationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    logger.info(f"Processing abstraction request for project {project.id}")
    try:
        output = abstract(project, options)
    except (AbstractionError, ModelGraphError) as e:
        error_id = uuid.uuid4().hex[:12]
        logger.error(f"{error_id} - Abstraction failed: {e}")
        print(f"❌ Abstraction failed ({error_id}): {e}", file=sys.stderr)
        return 1

    text = json.dumps(output.to_json_dict(), indent=2, ensure_ascii=False)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n", encoding="utf-8")
        summary = output.get_summary()
        print(f"✅ Wrote '{summary['diagram_name']}' to {args.output}", file=sys.stderr)
    else:
        print(text)

    for issue in output.issues:
        print(f"⚠️ {issue.title}", file=sys.stderr)
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="ontoabstract",
        description=f"{settings.app_name}: abstract OntoUML diagrams by folding parts, subtypes and aspects",
    )
    parser.add_argument("--version", action="version",
                        version=f"{settings.app_name} {settings.app_version}")
    parser.add_argument("project", type=Path,
                        help="OntoUML project JSON, or a request body with 'project' and 'options'")
    parser.add_argument("-d", "--diagram", type=str, default=None,
                        help="Id of the diagram to abstract")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("-e", "--element", type=str, default=None,
                        help="Id of the element (or view) to abstract from")
    target.add_argument("-r", "--rule", type=str, default=None,
                        choices=[rule.value for rule in AbstractionRule],
                        help="Bulk abstraction rule")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="Write the result here instead of stdout")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_level:
        setup_logging(log_level=args.log_level.upper())
    return abstract_command(args)


if __name__ == "__main__":
    sys.exit(main())
