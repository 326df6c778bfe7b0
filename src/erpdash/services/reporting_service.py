from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from erpdash.application.store import DomainStore
from erpdash.domain.models import DailySales, DashboardSummary, Sale, SalesReport, TopProduct
from erpdash.formatting import format_date

log = logging.getLogger(__name__)


class ReportingService:
    def __init__(self, store: DomainStore):
        self.store = store

    def filter_sales(self, start: datetime, end: datetime, category: Optional[str] = None) -> list[Sale]:
        # end is inclusive through the end of its day
        end_of_day = datetime.combine(end.date(), time.max)
        sales = [s for s in self.store.sales if start <= s.date <= end_of_day]
        if category:
            products = {p.id: p for p in self.store.products}
            sales = [
                s for s in sales
                if any(it.product_id in products and products[it.product_id].category == category for it in s.items)
            ]
        return sales

    def build_report(self, start: datetime, end: datetime, category: Optional[str] = None) -> SalesReport:
        sales = self.filter_sales(start, end, category)
        products = {p.id: p for p in self.store.products}

        total_sales = len(sales)
        total_revenue = sum(s.total_amount for s in sales)

        # profit uses the live cost price; lines for deleted products add nothing
        total_profit = 0.0
        for s in sales:
            for it in s.items:
                product = products.get(it.product_id)
                if product:
                    total_profit += (it.unit_price - product.cost_price) * it.quantity

        profit_margin = (total_profit / total_revenue) * 100 if total_revenue > 0 else 0.0
        average_order_value = total_revenue / total_sales if total_sales > 0 else 0.0

        by_product: dict[str, list] = {}
        for s in sales:
            for it in s.items:
                entry = by_product.get(it.product_id)
                if entry:
                    entry[1] += it.quantity
                    entry[2] += it.total_price
                else:
                    by_product[it.product_id] = [it.product_name, it.quantity, it.total_price]
        top_products = sorted(
            (TopProduct(product_id=pid, product_name=v[0], quantity=v[1], revenue=v[2]) for pid, v in by_product.items()),
            key=lambda t: t.revenue,
            reverse=True,
        )[:5]

        by_day: dict[str, list] = {}
        for s in sales:
            key = s.date.date().isoformat()
            entry = by_day.setdefault(key, [0, 0.0])
            entry[0] += 1
            entry[1] += s.total_amount
        sales_by_day = [DailySales(date=d, sales=v[0], revenue=v[1]) for d, v in sorted(by_day.items())]

        return SalesReport(
            start=start,
            end=end,
            total_sales=total_sales,
            total_revenue=total_revenue,
            total_profit=total_profit,
            profit_margin=profit_margin,
            average_order_value=average_order_value,
            top_products=top_products,
            sales_by_day=sales_by_day,
            category=category,
        )

    def dashboard_summary(self) -> DashboardSummary:
        products = self.store.products
        sales = self.store.sales
        low = [p for p in products if p.is_low_stock]
        return DashboardSummary(
            total_revenue=sum(s.total_amount for s in sales),
            total_sales=len(sales),
            total_products=len(products),
            low_stock_count=len(low),
            recent_sales=sorted(sales, key=lambda s: s.date, reverse=True)[:5],
            low_stock_products=sorted(low, key=lambda p: p.quantity)[:5],
        )

    def export_report_excel(self, path: str, report: SalesReport) -> None:
        wb = Workbook()

        def money(cell):
            cell.number_format = "#,##0.00"

        def bold_row(ws, r):
            for c in ws[r]:
                c.font = Font(bold=True)

        def set_widths(ws, widths: dict[str, int]):
            for col, w in widths.items():
                ws.column_dimensions[col].width = w

        def add_table(ws, name: str, start_row: int, end_row: int, end_col: int):
            ref = f"A{start_row}:{get_column_letter(end_col)}{end_row}"
            tab = Table(displayName=name, ref=ref)
            tab.tableStyleInfo = TableStyleInfo(
                name="TableStyleMedium9",
                showRowStripes=True,
                showColumnStripes=False,
            )
            ws.add_table(tab)

        # -------- 1) Summary --------
        ws = wb.active
        ws.title = "Summary"
        ws["A1"] = "Sales Report"
        ws["A1"].font = Font(bold=True, size=14)

        ws["A3"] = "Window"
        ws["B3"] = f"{format_date(report.start)}  ->  {format_date(report.end)}"
        ws["A4"] = "Category"
        ws["B4"] = report.category or "All"

        rows = [
            ("Total sales", int(report.total_sales), "int"),
            ("Total revenue", float(report.total_revenue), "money"),
            ("Total profit", float(report.total_profit), "money"),
            ("Profit margin %", float(report.profit_margin), "money"),
            ("Average order value", float(report.average_order_value), "money"),
        ]
        for i, (label, val, kind) in enumerate(rows):
            r = 6 + i
            ws[f"A{r}"] = label
            ws[f"B{r}"] = val
            if kind == "money":
                money(ws[f"B{r}"])
        set_widths(ws, {"A": 24, "B": 34})

        # -------- 2) Top Products --------
        ws2 = wb.create_sheet("Top Products")
        ws2.append(["Product ID", "Product", "Units Sold", "Revenue"])
        bold_row(ws2, 1)
        for t in report.top_products:
            ws2.append([t.product_id, t.product_name, int(t.quantity), float(t.revenue)])
            money(ws2[f"D{ws2.max_row}"])
        set_widths(ws2, {"A": 22, "B": 34, "C": 12, "D": 16})
        if ws2.max_row >= 2:
            add_table(ws2, "TopProducts", 1, ws2.max_row, 4)

        # -------- 3) Sales by Day --------
        ws3 = wb.create_sheet("Sales by Day")
        ws3.append(["Date", "Sales", "Revenue"])
        bold_row(ws3, 1)
        for d in report.sales_by_day:
            ws3.append([d.date, int(d.sales), float(d.revenue)])
            money(ws3[f"C{ws3.max_row}"])
        ws3.freeze_panes = "A2"
        set_widths(ws3, {"A": 14, "B": 10, "C": 16})
        if ws3.max_row >= 2:
            add_table(ws3, "SalesByDay", 1, ws3.max_row, 3)

        wb.save(path)
        log.info("report_exported path=%s sales=%s", path, report.total_sales)
