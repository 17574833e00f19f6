"""
WSJF Calculator - Input Boundary
Turns raw form / JSON payloads into clean initiative and weight values.
"""
import math

from engines.scoring import SCORE_FIELDS, WEIGHT_FIELDS

SCORE_RANGE = (1, 10)
JOB_SIZE_RANGE = (1, 20)
FORM_DEFAULT = 5


class InputError(ValueError):
    """Rejected user input; the message is shown to the user as-is."""


def _clamped_int(value, lo, hi, field):
    if value is None or value == '':
        value = FORM_DEFAULT
    try:
        n = int(float(value))
    except (TypeError, ValueError, OverflowError):
        raise InputError(f"{field} must be a whole number between {lo} and {hi}.")
    return max(lo, min(hi, n))


def parse_initiative(body):
    name = body.get('name') or ''
    if not str(name).strip():
        raise InputError('Initiative Name cannot be empty.')
    raw = {'name': str(name)}
    for f in SCORE_FIELDS:
        raw[f] = _clamped_int(body.get(f), *SCORE_RANGE, field=f)
    raw['jobSize'] = _clamped_int(body.get('jobSize'), *JOB_SIZE_RANGE, field='jobSize')
    return raw


def parse_weight(value):
    """Unparseable or non-finite -> 0, negative -> 0."""
    try:
        w = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(w):
        return 0.0
    return max(0.0, w)


def parse_weight_update(body):
    """Accept {'key', 'value'} for one field or {'weights': {...}} for several."""
    if 'weights' in body:
        updates = body.get('weights') or {}
        if not isinstance(updates, dict):
            raise InputError('weights must be an object of field: value pairs')
    elif body.get('key'):
        updates = {body['key']: body.get('value')}
    else:
        raise InputError('key required')
    unknown = [k for k in updates if k not in WEIGHT_FIELDS]
    if unknown:
        raise InputError(f"Unknown weight field(s): {', '.join(unknown)}")
    return {k: parse_weight(v) for k, v in updates.items()}
