from __future__ import annotations

import logging
import os
import warnings
from datetime import datetime
from typing import Any, Optional

import numpy as np

from interpolation_pro.errors import InvalidInput
from interpolation_pro.formula import format_number
from interpolation_pro.samples import SampleSet
from interpolation_pro.session import InterpolationSession

logger = logging.getLogger(__name__)

CSV_HEADER: str = "X,Y"


def read_csv(path: "os.PathLike[str] | str") -> tuple[list[float], list[float]]:
    """Read a two-column ``X,Y`` file.  The first line is a header and is skipped."""
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            data = np.loadtxt(path, delimiter=",", skiprows=1, ndmin=2, dtype=np.float64,
                              usecols=(0, 1))
    except (ValueError, IndexError) as exc:
        raise InvalidInput(f"Could not read x,y pairs from {os.fspath(path)}: {exc}") from exc
    if data.size == 0:
        raise InvalidInput(f"No data rows in {os.fspath(path)}")
    logger.debug("Read %d rows from %s", data.shape[0], os.fspath(path))
    return [float(v) for v in data[:, 0]], [float(v) for v in data[:, 1]]


def write_csv(path: "os.PathLike[str] | str", x: Any, y: Any = None) -> None:
    samples = SampleSet.coerce(x, y)
    rows = np.array(
        [[format_number(a), format_number(b)] for a, b in zip(samples.x, samples.y)],
        dtype=object,
    )
    np.savetxt(path, rows, fmt="%s", delimiter=",", header=CSV_HEADER, comments="")
    logger.info("Exported %d rows to %s", samples.n, os.fspath(path))


def data_table(x: Any, y: Any = None) -> list[tuple[int, float, float]]:
    """(index, x, y) rows in input order."""
    samples = SampleSet.coerce(x, y)
    return [(i, a, b) for i, (a, b) in enumerate(samples.pairs())]


def report_header(session: InterpolationSession, now: Optional[datetime] = None) -> list[str]:
    """Title and summary lines shared by the text and PDF reports."""
    now = now if now is not None else datetime.now()
    s = session.samples
    return [
        f"{session.selection_name} Interpolation",
        f"Data Points: {s.n} points",
        f"X Range: {format_number(s.x_min)} to {format_number(s.x_max)}",
        f"Y Range: {format_number(float(np.min(s.y)))} to {format_number(float(np.max(s.y)))}",
        f"Date: {now:%Y-%m-%d}",
        f"Time: {now:%H:%M:%S}",
    ]


def report_lines(session: InterpolationSession, now: Optional[datetime] = None) -> list[str]:
    """Header, data rows and formula, one printed line per entry."""
    lines = report_header(session, now)
    lines.append("")
    lines.append("Interpolation Data")
    lines.extend(f"{format_number(a)} , {format_number(b)}" for _, a, b in data_table(session.samples))
    lines.append("")
    lines.extend(session.formula().splitlines())
    return lines


def build_report(session: InterpolationSession, now: Optional[datetime] = None) -> str:
    return "\n".join(report_lines(session, now)) + "\n"


def default_report_name(session: InterpolationSession, suffix: str = "pdf",
                        now: Optional[datetime] = None) -> str:
    now = now if now is not None else datetime.now()
    slug = session.selection_name.lower().replace(" ", "_")
    return f"interpolation_graphs_{slug}_{now:%Y-%m-%d}.{suffix}"
