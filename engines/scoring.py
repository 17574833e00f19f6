"""
WSJF Calculator - Scoring Engine
Cost of Delay as a weighted sum of four scores, and WSJF = CoD / job size.
"""

SCORE_FIELDS = ('uvTri', 'tcEd', 'rrOe', 'crSla')

# score field -> weight field
WEIGHT_FOR = {
    'uvTri': 'wUvTri',
    'tcEd':  'wTcEd',
    'rrOe':  'wRrOe',
    'crSla': 'wCrSla',
}

WEIGHT_FIELDS = tuple(WEIGHT_FOR[f] for f in SCORE_FIELDS)

DEFAULT_WEIGHTS = {'wUvTri': 3, 'wTcEd': 2, 'wRrOe': 2, 'wCrSla': 1}

LABELS = {
    'uvTri': ('UV/TRI', 'User Value / Training Readiness Impact'),
    'tcEd':  ('TC/ED', 'Time Criticality / Event Dependency'),
    'rrOe':  ('RR/OE', 'Risk Reduction / Opportunity Enablement'),
    'crSla': ('CR/SLA', 'Compliance / Regulatory / SLA'),
}


def default_weights():
    return dict(DEFAULT_WEIGHTS)


def calculate_cod(scores, weights):
    """Cost of Delay: dot product of the four scores with their weights.

    No range checks. NaN or inf in either input propagates to the result.
    """
    return (scores['uvTri'] * weights['wUvTri']
            + scores['tcEd'] * weights['wTcEd']
            + scores['rrOe'] * weights['wRrOe']
            + scores['crSla'] * weights['wCrSla'])


def calculate_wsjf(cod, job_size):
    """CoD per unit of job size; 0 when job size is not positive."""
    return cod / job_size if job_size > 0 else 0


def weight_rows(weights):
    """(label, value) pairs in display order, used by the page and the report."""
    return [(f"{LABELS[f][1]} ({LABELS[f][0]}) Weight", weights[WEIGHT_FOR[f]])
            for f in SCORE_FIELDS]
