"""Estimator Output Logger for BuildSource.

Provides highly visible, formatted logging for model training and
estimate results, with distinctive visual markers that stand out in
the dev server's console.
"""

from datetime import datetime, timezone
from typing import Dict, Optional

import structlog

logger = structlog.get_logger()

# Visual markers for different log types
BANNER_WIDTH = 80
TRAINING_BANNER_CHAR = "█"
ESTIMATE_BANNER_CHAR = "═"


def _create_banner(char: str, text: str, width: int = BANNER_WIDTH) -> str:
    """Create a centered banner with given character."""
    text_with_spaces = f" {text} "
    padding = (width - len(text_with_spaces)) // 2
    return char * padding + text_with_spaces + char * (width - padding - len(text_with_spaces))


def _format_rupees(amount: float) -> str:
    return f"₹{amount:,.0f}"


def log_training_start(regressor_kind: str, sample_count: int) -> None:
    """Log regressor training start with prominent banner."""
    timestamp = datetime.now(timezone.utc).isoformat()

    print("\n")
    print(TRAINING_BANNER_CHAR * BANNER_WIDTH)
    print(_create_banner(TRAINING_BANNER_CHAR, "COST MODEL TRAINING STARTED"))
    print(TRAINING_BANNER_CHAR * BANNER_WIDTH)
    print(f"║ Regressor : {regressor_kind}")
    print(f"║ Timestamp : {timestamp}")
    print(f"║ Samples   : {sample_count}")
    print(TRAINING_BANNER_CHAR * BANNER_WIDTH)
    print("\n")

    logger.info(
        "training_start_logged",
        regressor=regressor_kind,
        sample_count=sample_count
    )


def log_training_complete(
    regressor_kind: str,
    sample_count: int,
    duration_ms: int,
    training_rmse: Optional[float] = None
) -> None:
    """Log regressor training completion with summary."""
    rmse_text = _format_rupees(training_rmse) if training_rmse is not None else "n/a"

    print("\n")
    print(TRAINING_BANNER_CHAR * BANNER_WIDTH)
    print(_create_banner(TRAINING_BANNER_CHAR, "✓ COST MODEL READY"))
    print(TRAINING_BANNER_CHAR * BANNER_WIDTH)
    print(f"║ Regressor     : {regressor_kind}")
    print(f"║ Samples       : {sample_count}")
    print(f"║ Duration      : {duration_ms:,} ms ({duration_ms / 1000:.2f}s)")
    print(f"║ Training RMSE : {rmse_text}")
    print(TRAINING_BANNER_CHAR * BANNER_WIDTH)
    print("\n")

    logger.info(
        "training_complete_logged",
        regressor=regressor_kind,
        sample_count=sample_count,
        duration_ms=duration_ms
    )


def log_estimate_result(
    total_cost: float,
    regression_estimate: float,
    rule_based_total: float,
    breakdown: Dict[str, float],
    recommendation_count: int
) -> None:
    """Log an estimate with its category breakdown."""
    source = "regression" if regression_estimate > rule_based_total else "rule-based"

    print("\n")
    print(ESTIMATE_BANNER_CHAR * BANNER_WIDTH)
    print(_create_banner(ESTIMATE_BANNER_CHAR, f"✓ ESTIMATE: {_format_rupees(total_cost)}"))
    print(ESTIMATE_BANNER_CHAR * BANNER_WIDTH)
    print(f"║ Regression      : {_format_rupees(regression_estimate)}")
    print(f"║ Rule-based      : {_format_rupees(rule_based_total)}")
    print(f"║ Headline source : {source}")
    print(ESTIMATE_BANNER_CHAR * BANNER_WIDTH)
    print("║ BREAKDOWN:")
    for category, amount in breakdown.items():
        if amount > 0:
            print(f"║   • {category.capitalize():<14}: {_format_rupees(amount)}")
    print(ESTIMATE_BANNER_CHAR * BANNER_WIDTH)
    print("\n")

    logger.info(
        "estimate_result_logged",
        total_cost=round(total_cost, 2),
        headline_source=source,
        recommendation_count=recommendation_count
    )


def log_estimate_failed(error_code: str, error: str) -> None:
    """Log estimate failure."""
    print("\n")
    print("!" * BANNER_WIDTH)
    print(_create_banner("!", "✗ ESTIMATE FAILED"))
    print("!" * BANNER_WIDTH)
    print(f"! Code  : {error_code}")
    print(f"! Error : {error}")
    print("!" * BANNER_WIDTH)
    print("\n")

    logger.error(
        "estimate_failed_logged",
        error_code=error_code,
        error=error
    )
