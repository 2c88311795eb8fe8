"""Clean raw FRED observations into ascending numeric series."""

from collections.abc import Iterable, Mapping

import pandas as pd

from investor_dashboard.models import Observation


# FRED reports "no data for this date" as a literal dot
MISSING_VALUE = "."


def _as_record(item: Mapping | Observation) -> dict:
    if isinstance(item, Observation):
        return {"date": item.date, "value": item.value}
    return {"date": item.get("date"), "value": item.get("value")}


def normalize_observations(raw: Iterable[Mapping | Observation]) -> list[Observation]:
    """
    Drop missing entries, parse values and sort by date.

    Args:
        raw: FRED observation dicts (any order) or already-normalized Observations

    Returns:
        Observations in ascending date order. Normalizing the output again
        returns an equal list.
    """
    # FRED dates are ISO strings; anything else is a malformed row
    records = [
        record
        for record in map(_as_record, raw)
        if isinstance(record["date"], str)
        and record["value"] is not None
        and record["value"] != MISSING_VALUE
    ]
    if not records:
        return []

    df = pd.DataFrame.from_records(records, columns=["date", "value"])
    df["date"] = pd.to_datetime(df["date"], format="%Y-%m-%d", errors="coerce")
    df["value"] = pd.to_numeric(df["value"], errors="coerce")
    df = df[["date", "value"]].dropna()
    df = df.sort_values("date", kind="stable")

    return [
        Observation(date=ts.strftime("%Y-%m-%d"), value=float(v))
        for ts, v in zip(df["date"], df["value"])
    ]
