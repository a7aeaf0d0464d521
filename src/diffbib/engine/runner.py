"""Load-then-compare pipeline.

Stages:
    load:  read the origin and destiny files
    match: run the configured strategy on both collections

Loading is a single fallible stage: if either side fails, the run stops
with :class:`SourceLoadError` and no strategy runs.
"""

import sys
import time
from pathlib import Path

from diffbib.audit.logger import AuditLogger
from diffbib.engine.config import DiffConfig
from diffbib.errors import SourceLoadError
from diffbib.matching import Strategy, run_strategy
from diffbib.matching.models import StopHook
from diffbib.parse.loading import DESTINY, ORIGIN, LoadedSource, load_source
from diffbib.report import DiffReport

STAGE_LOAD = "load"
STAGE_MATCH = "match"


def _load_sources(
    origin_path: Path,
    destiny_path: Path,
    strict: bool,
    logger: AuditLogger | None,
) -> tuple[LoadedSource, LoadedSource]:
    """Stage 1: load both sides, origin first."""
    started = time.perf_counter()
    if logger:
        logger.stage_started(STAGE_LOAD)

    loaded: list[LoadedSource] = []
    for side, path in ((ORIGIN, origin_path), (DESTINY, destiny_path)):
        source = load_source(path, side, strict=strict)
        loaded.append(source)
        if logger:
            logger.source_loaded(
                side=side,
                path=source.path,
                records=len(source.records),
                sha256=source.file_digest,
                warnings=len(source.warnings),
                errors=len(source.errors),
            )

    origin, destiny = loaded

    if logger:
        logger.stage_finished(
            STAGE_LOAD,
            duration_seconds=time.perf_counter() - started,
            counters={"origin_records": len(origin.records), "destiny_records": len(destiny.records)},
        )

    return origin, destiny


def _match(
    origin: LoadedSource,
    destiny: LoadedSource,
    config: DiffConfig,
    logger: AuditLogger | None,
    should_stop: StopHook | None,
) -> DiffReport:
    """Stage 2: run the strategy and wrap the result in a report."""
    started = time.perf_counter()
    if logger:
        logger.stage_started(STAGE_MATCH, expected_records=len(origin.records) + len(destiny.records))

    strategy = Strategy(config.strategy)
    result = run_strategy(
        strategy,
        config.fields,
        origin.records,
        destiny.records,
        threshold=config.threshold,
        should_stop=should_stop,
    )

    if logger:
        logger.stage_finished(
            STAGE_MATCH,
            duration_seconds=time.perf_counter() - started,
            counters=result.counts(),
        )

    return DiffReport(
        result=result,
        origin_entries=len(origin.records),
        destiny_entries=len(destiny.records),
        origin=origin.describe(),
        destiny=destiny.describe(),
        threshold=config.threshold if strategy is Strategy.BRUTEFORCE else None,
    )


def run_diff(
    origin_path: Path | str,
    destiny_path: Path | str,
    config: DiffConfig | None = None,
    logger: AuditLogger | None = None,
    should_stop: StopHook | None = None,
) -> DiffReport:
    """Compare two BibTeX files.

    Parameters
    ----------
    origin_path : Path | str
        First bibliography.
    destiny_path : Path | str
        Second bibliography.
    config : DiffConfig | None, optional
        Comparison configuration. If None, uses defaults (hash, key,title).
    logger : AuditLogger | None, optional
        Audit logger for tracking. If None, no logging.
    should_stop : StopHook | None, optional
        Cooperative cancellation hook polled during matching.

    Returns
    -------
    DiffReport
        Report with the three buckets and both collection sizes.

    Raises
    ------
    SourceLoadError
        If either file cannot be loaded. Nothing is compared.
    ComparisonCancelledError
        If *should_stop* aborts the match.

    Examples
    --------
        >>> from diffbib.engine import DiffConfig, run_diff
        >>> report = run_diff("before.bib", "after.bib", DiffConfig(strategy="bruteforce"))
        >>> print(report.render_text())
    """
    if config is None:
        config = DiffConfig()

    started = time.perf_counter()

    if logger:
        parameters = config.to_dict()
        parameters["origin"] = str(origin_path)
        parameters["destiny"] = str(destiny_path)
        logger.run_started(command=list(sys.argv), parameters=parameters)

    try:
        origin, destiny = _load_sources(Path(origin_path), Path(destiny_path), config.strict, logger)
        report = _match(origin, destiny, config, logger, should_stop)
    except Exception as e:
        if logger:
            logger.error(
                exception_class=type(e).__name__,
                message=str(e),
                side=e.side if isinstance(e, SourceLoadError) else None,
                reason=e.reason if isinstance(e, SourceLoadError) else None,
            )
            logger.run_finished("failed", duration_seconds=time.perf_counter() - started)
        raise

    if logger:
        logger.run_finished("success", duration_seconds=time.perf_counter() - started)

    return report
