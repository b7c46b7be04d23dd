#!/usr/bin/env python3
"""
Example usage of the Workshop Trend Calculator.

This script demonstrates how to import a pasted stats block, look at the
advisor's history and get a close/keep-open recommendation.
"""

import logging
import sys
from datetime import date, timedelta
from workshop_trends import AdvisorManager, ForecastingEngine, BlockParseError


def build_sample_block(today: date) -> str:
    """A block as it looks when copied from the sheet: header, labels, dates."""
    dates = [(today - timedelta(days=d)).strftime('%m/%d/%Y') for d in (60, 31, 10)]
    future = (today + timedelta(days=14)).strftime('%m/%d/%Y')
    rows = [
        ["AVL", "Greenbelt, MD"],
        ["Date", *dates, future, "Avg"],
        ["Total Feds @ Close", "30", "28", "30", "12", "29.3"],
        ["Total Sps @ Close", "4", "2", "5", "", "3.7"],
        ["Total Fed Confirmed", "18", "20", "22", "", "20"],
        ["Total Feds Attended", "20", "21", "27", "", "22.7"],
        ["Total Sps Attended", "3", "1", "4", "", "2.7"],
        ["Total Walk-ins", "2", "1", "3", "", "2"],
    ]
    return "\n".join("\t".join(row) for row in rows)


def main():
    logging.basicConfig(level=logging.INFO, stream=sys.stdout,
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    print("=== Workshop Trend Calculator Demo ===\n")
    today = date.today()

    # 1. Import a pasted block
    print("1. Importing pasted block...")
    manager = AdvisorManager()
    result = manager.import_block(build_sample_block(today))
    print(f"   {result.message}")

    # 2. Bad pastes are rejected with a specific reason
    print("\n2. Importing a block without labels...")
    try:
        manager.import_block("AVL\tGreenbelt, MD\n1\t2\t3")
    except BlockParseError as e:
        print(f"   Rejected ({e.kind}): {e}")

    # 3. History
    print("\n3. Workshop history:")
    print(manager.get_history(result.key).to_string(index=False))

    # 4. Backtest
    engine = ForecastingEngine(manager.advisors[result.key].workshops)
    metrics = engine.evaluate_model()
    print(f"\n4. Backtest over {metrics['samples']} workshop(s): MAE {metrics['mae']:.2f}")

    # 5. Live forecast
    print("\n5. Forecast with 25 feds registered, target 20...")
    manager.update_forecast_input(result.key, current_feds=25, current_sps=0, target=20)
    rec = manager.recommend(result.key)
    print(f"   Show rate: {rec.show_rate * 100:.1f}%  Avg walk-ins: {rec.avg_walkins:.1f}")
    print(f"   Expected attendance: {rec.decision.expected_attendance:.1f}")
    print(f"   {rec.result}")

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
