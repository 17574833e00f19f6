"""
WSJF Calculator - Initiative Store
Keeps the ranked initiative list consistent with the current weights.

All functions work on a plain list of initiative dicts and mutate it in place:
  add_initiative    -> build record (id + cod + wsjf), append, rank
  delete_initiative -> drop by id, no-op when absent
  recompute         -> refresh cod/wsjf for every record, rank
Recompute belongs to weight changes only; adds and deletes never call it.
"""
import logging
import uuid

from engines.scoring import SCORE_FIELDS, calculate_cod, calculate_wsjf


def _derive(init, weights):
    cod = calculate_cod(init, weights)
    init['cod'] = cod
    init['wsjf'] = calculate_wsjf(cod, init['jobSize'])
    return init


def build_initiative(raw, weights):
    init = {'id': uuid.uuid4().hex, 'name': raw['name']}
    for f in SCORE_FIELDS:
        init[f] = raw[f]
    init['jobSize'] = raw['jobSize']
    return _derive(init, weights)


def rank(initiatives):
    # stable: equal wsjf keeps prior relative order.
    # swapped in one step, readers never see a partly sorted or empty list
    initiatives[:] = sorted(initiatives, key=lambda x: x['wsjf'], reverse=True)
    return initiatives


def add_initiative(initiatives, raw, weights):
    init = build_initiative(raw, weights)
    initiatives.append(init)
    rank(initiatives)
    logging.info(f"Added initiative '{init['name']}' ({init['id']}): "
                 f"cod={init['cod']}, wsjf={init['wsjf']}")
    return init


def delete_initiative(initiatives, initiative_id):
    for idx, init in enumerate(initiatives):
        if init['id'] == initiative_id:
            del initiatives[idx]
            logging.info(f"Deleted initiative '{init['name']}' ({initiative_id})")
            return True
    return False


def recompute(initiatives, weights):
    """Re-derive cod/wsjf for every initiative against `weights`, then rank.

    Name, scores and job size are left untouched. Running it twice with the
    same weights gives identical values and order.
    """
    for init in initiatives:
        _derive(init, weights)
    rank(initiatives)
    logging.info(f"Recomputed {len(initiatives)} initiative(s) with weights {weights}")
    return initiatives


def summarize(initiatives):
    n = len(initiatives)
    return {
        'count': n,
        'totalJobSize': sum(i['jobSize'] for i in initiatives),
        'topInitiative': initiatives[0]['name'] if initiatives else None,
        'avgWsjf': round(sum(i['wsjf'] for i in initiatives) / max(n, 1), 2),
    }
