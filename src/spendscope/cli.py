"""Flask CLI commands for SpendScope."""

from __future__ import annotations

import json
from datetime import datetime

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("spendscope-seed-categories")
    def seed_categories() -> None:
        """Create the shared default categories if they are missing."""

        from .constants.categories import DEFAULT_CATEGORIES
        from .extensions import get_session_factory
        from .infra.repositories import SQLModelCategoryRepository

        repo = SQLModelCategoryRepository(get_session_factory())
        added = repo.ensure_defaults(DEFAULT_CATEGORIES)
        click.echo(f"Default categories added: {added}")

    @app.cli.command("spendscope-stats")
    @click.option("--user-id", type=int, required=True, help="User whose dashboard to compute")
    @click.option("--months", type=click.IntRange(min=1), default=None, help="Trend length")
    def stats(user_id: int, months: int | None) -> None:
        """Print dashboard stats and spending trends as JSON."""

        from .extensions import get_analytics

        service = get_analytics()
        now = datetime.now()
        months = months or app.config["SPENDSCOPE_CONFIG"].TREND_MONTHS
        payload = {
            "stats": service.compute_dashboard_stats(user_id, now).to_dict(),
            "trends": [
                item.to_dict() for item in service.compute_spending_trends(user_id, months, now)
            ],
        }
        click.echo(json.dumps(payload, indent=2))
