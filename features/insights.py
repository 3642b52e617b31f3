import pandas as pd

from app_utils.metrics import percent, trees_planted
from features.tracker import compute_progress, compute_streak, done_count, is_successful

COLUMNS = ["day", "confirmed", "tasks", "done", "completion", "successful"]


def days_frame(days) -> pd.DataFrame:
    rows = [{
        "day": d.number,
        "confirmed": d.confirmed,
        "tasks": len(d.tasks),
        "done": done_count(d),
        "completion": percent(done_count(d), len(d.tasks)),
        "successful": d.confirmed and is_successful(d),
    } for d in days]
    return pd.DataFrame(rows, columns=COLUMNS)


def tracker_summary(days):
    # days: list of tracker Day records, oldest first
    if not days:
        return None

    df = days_frame(days)
    confirmed = df[df["confirmed"]]

    progress = compute_progress(days)
    out = {
        "progress": progress,
        "streak": compute_streak(days),
        "confirmed_days": int(len(confirmed)),
        "best_day": None,
        "trees": trees_planted(progress),
    }

    if not confirmed.empty:
        best = confirmed.sort_values(["completion", "day"], ascending=[False, True]).iloc[0]
        out["best_day"] = int(best["day"])

    return out
