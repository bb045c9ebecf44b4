"""Linting Swift files with the registered rules.

Files are independent of each other, so they are linted in parallel with a
thread pool. Violations are sorted by path and offset afterwards, which keeps
the output stable regardless of completion order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from structdoc.config import RuleConfiguration
from structdoc.report import Report
from structdoc.rules.base import Rule, StyleViolation
from structdoc.rules.registry import registry
from structdoc.swift import SourceReadError, SwiftFile

logger = logging.getLogger(__name__)

SWIFT_SUFFIX = ".swift"
EXCLUDED_DIRECTORIES = frozenset({".build", ".git", "Pods", "Carthage", "DerivedData"})


def iter_swift_files(paths: Iterable[str | Path]) -> Iterator[Path]:
    """Yield Swift files from files and directories, recursively, sorted per directory."""
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for candidate in sorted(path.rglob(f"*{SWIFT_SUFFIX}")):
                if EXCLUDED_DIRECTORIES.intersection(candidate.relative_to(path).parts):
                    continue
                if candidate.is_file():
                    yield candidate
        elif path.suffix == SWIFT_SUFFIX:
            yield path
        else:
            logger.debug("Ignoring non-Swift path %s", path)


def create_rules(
    configuration: RuleConfiguration | None = None,
    only: Sequence[str] | None = None,
) -> list[Rule]:
    """Instantiate registered rules with a shared configuration.

    Raises:
        ValueError: If an identifier in ``only`` is not registered
    """
    if only:
        classes = [registry.get(identifier) for identifier in only]
    else:
        classes = [cls for _, cls in sorted(registry)]
    return [cls(configuration) for cls in classes]


def lint_source(file: SwiftFile, rules: Sequence[Rule]) -> list[StyleViolation]:
    """Run all rules on one source file."""
    violations: list[StyleViolation] = []
    for rule in rules:
        violations.extend(rule.validate(file))
    return violations


def lint_file(path: Path, rules: Sequence[Rule]) -> list[StyleViolation]:
    """Read and lint one file.

    Raises:
        SourceReadError: If the file cannot be read
    """
    return lint_source(SwiftFile.from_path(path), rules)


def lint_paths(
    paths: Iterable[str | Path],
    configuration: RuleConfiguration | None = None,
    *,
    rules: Sequence[Rule] | None = None,
    jobs: int = 1,
) -> Report:
    """Lint files and directories.

    Args:
        paths: Swift files or directories to search
        configuration: Rule configuration (defaults apply when None)
        rules: Rules to run (all registered rules when None)
        jobs: Number of worker threads

    Returns:
        Report with violations sorted by file and offset
    """
    rules = list(rules) if rules is not None else create_rules(configuration)
    files = list(iter_swift_files(paths))
    violations: list[StyleViolation] = []
    skipped: list[str] = []

    with ThreadPoolExecutor(max_workers=max(jobs, 1)) as executor:
        futures = {executor.submit(lint_file, path, rules): path for path in files}

        for future in as_completed(futures):
            path = futures[future]
            try:
                violations.extend(future.result())
            except SourceReadError as e:
                logger.warning("%s", e)
                skipped.append(str(path))

    violations.sort(key=lambda v: (v.location.path or "", v.location.byte_offset))
    logger.debug("Linted %d files, %d violations", len(files), len(violations))
    return Report(
        violations=violations,
        files_checked=len(files) - len(skipped),
        skipped_files=sorted(skipped),
    )
