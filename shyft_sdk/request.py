"""
Request building for the Shyft API.

A RequestDescriptor is built fresh for every call and is never shared, so
retries re-send exactly the same method, path, query and body.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from . import constants
from .models import HistoryOptions, ParseSelectedOptions

QueryParams = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to (re-)issue one HTTP request"""
    method: str
    path: str
    params: QueryParams = ()
    json: Optional[Mapping[str, Any]] = None


def canonical_value(value: Any) -> str:
    """
    Render a query value the way the API expects it.

    Booleans become ``true``/``false``; everything else goes through str().
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(
    defaults: Iterable[Tuple[str, Any]],
    required: Iterable[Tuple[str, Any]] = (),
    optional: Iterable[Tuple[str, Any]] = (),
) -> QueryParams:
    """
    Merge the three query layers into one ordered tuple of pairs.

    A key already present is never replaced by a later layer. Optional
    entries whose value is None are left out entirely.

    Args:
        defaults: Client-wide parameters (network, commitment)
        required: Per-call parameters that are always sent
        optional: Per-call parameters sent only when a value was supplied

    Returns:
        Ordered tuple of (key, value) string pairs
    """
    merged: List[Tuple[str, str]] = []
    seen = set()

    def _add(pairs: Iterable[Tuple[str, Any]], skip_none: bool) -> None:
        for key, value in pairs:
            if key in seen:
                continue
            if value is None:
                if skip_none:
                    continue
                raise ValueError(f"Required parameter '{key}' has no value")
            seen.add(key)
            merged.append((key, canonical_value(value)))

    _add(defaults, skip_none=False)
    _add(required, skip_none=False)
    _add(optional, skip_none=True)
    return tuple(merged)


def history_request(
    defaults: QueryParams,
    account: str,
    options: HistoryOptions,
) -> RequestDescriptor:
    if not account:
        raise ValueError("account must be a non-empty string")
    params = build_query(
        defaults,
        required=[("account", account)],
        optional=[
            ("tx_num", options.tx_num),
            ("before_tx_signature", options.before_tx_signature),
            ("until_tx_signature", options.until_tx_signature),
            ("enable_raw", options.enable_raw),
            ("enable_events", options.enable_events),
        ],
    )
    return RequestDescriptor("GET", constants.TRANSACTION_HISTORY_PATH, params)


def parsed_request(defaults: QueryParams, tx_signature: str) -> RequestDescriptor:
    if not tx_signature:
        raise ValueError("tx_signature must be a non-empty string")
    params = build_query(defaults, required=[("txn_signature", tx_signature)])
    return RequestDescriptor("GET", constants.TRANSACTION_PARSED_PATH, params)


def parse_selected_request(
    defaults: QueryParams,
    signatures: Sequence[str],
    options: ParseSelectedOptions,
) -> RequestDescriptor:
    """
    Build the bulk-parse request.

    Bulk parsing is a POST with a JSON body rather than a query string, so the
    client-wide defaults are written into the body.

    Raises:
        ValueError: If no signatures are given or one of them is empty
    """
    if isinstance(signatures, str):
        raise ValueError("signatures must be a sequence of strings, not a single string")
    signatures = list(signatures)
    if not signatures:
        raise ValueError("At least one transaction signature is required")
    if not all(isinstance(sig, str) and sig for sig in signatures):
        raise ValueError("Transaction signatures must be non-empty strings")

    body: Dict[str, Any] = dict(defaults)
    body["transaction_signatures"] = signatures
    body["enable_raw"] = options.enable_raw
    body["enable_events"] = options.enable_events
    return RequestDescriptor("POST", constants.TRANSACTION_PARSE_SELECTED_PATH, json=body)
