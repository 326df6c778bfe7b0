from datetime import datetime

from erpdash.formatting import days_ago, format_currency, format_date, format_datetime


def test_currency_uses_indian_grouping():
    assert format_currency(0) == "₹0.00"
    assert format_currency(899) == "₹899.00"
    assert format_currency(58999) == "₹58,999.00"
    assert format_currency(1234567.891) == "₹12,34,567.89"
    assert format_currency(-1500.5) == "-₹1,500.50"


def test_dates():
    when = datetime(2024, 3, 5, 14, 7)
    assert format_date(when) == "05 Mar 2024"
    assert format_datetime(when) == "05 Mar 2024, 02:07 PM"


def test_days_ago():
    now = datetime(2024, 3, 15, 12, 0)
    assert days_ago(datetime(2024, 3, 15, 1, 0), now) == "Today"
    assert days_ago(datetime(2024, 3, 14, 11, 0), now) == "Yesterday"
    assert days_ago(datetime(2024, 3, 10, 12, 0), now) == "5 days ago"
