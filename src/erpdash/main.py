from __future__ import annotations

import logging

from erpdash.application.container import build_container
from erpdash.config import load_settings
from erpdash.logging_config import setup_logging

log = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    setup_logging(settings.paths.logs_dir, level=settings.log_level)

    container = build_container(settings.paths.storage_path, strict_products=settings.strict_products)

    summary = container.reporting.dashboard_summary()
    log.info(
        "dashboard_ready revenue=%.2f sales=%s products=%s low_stock=%s unread=%s user=%s strict=%s",
        summary.total_revenue,
        summary.total_sales,
        summary.total_products,
        summary.low_stock_count,
        container.notifications.unread_count(),
        container.auth.current_user().email if container.auth.current_user() else None,
        settings.strict_products,
    )


if __name__ == "__main__":
    main()
