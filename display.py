"""
Terminal Display Module

Renders analyses, bias warnings and record lists for the CLI. All
formatting lives here; the analyzers only return data.
"""

import logging
from typing import List

from config import ID_PREFIX_LENGTH, TERMINAL_WIDTH
from models import Investment, InvestmentAnalysis, Purchase, PurchaseAnalysis, RiskLevel

logger = logging.getLogger(__name__)

GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
CYAN = "\033[96m"
BOLD = "\033[1m"
RESET = "\033[0m"


class Display:
    def __init__(self, width: int = TERMINAL_WIDTH, color: bool = True):
        self.width = width
        self.color = color

    def _c(self, code: str, text: str) -> str:
        return f"{code}{text}{RESET}" if self.color else text

    def _rule(self, title: str) -> str:
        w = self.width
        return f"┌{'─' * (w - 2)}┐\n│{title:^{w - 2}}│\n└{'─' * (w - 2)}┘"

    def _bullets(self, header: str, items: List[str], code: str) -> List[str]:
        if not items:
            return []
        lines = [self._c(code, header)]
        lines += [f"  • {item}" for item in items]
        lines.append("")
        return lines

    def format_purchase_analysis(self, analysis: PurchaseAnalysis) -> str:
        lines = [
            self._rule("PURCHASE COST ANALYSIS"),
            "",
            f"  💰 Total cost of ownership: {analysis.total_cost_of_ownership:.2f}",
            f"  📊 Cost per use:            {analysis.cost_per_use:.2f}",
            f"  📅 Daily equivalent:        {analysis.daily_equivalent:.2f}",
            "",
        ]
        lines += self._bullets("⚠️  WARNINGS:", analysis.warnings, YELLOW)
        lines += self._bullets("💡 RECOMMENDATIONS:", analysis.recommendations, CYAN)
        return "\n".join(lines)

    def format_investment_analysis(self, analysis: InvestmentAnalysis, investment: Investment) -> str:
        lines = [
            self._rule("INVESTMENT ANALYSIS"),
            "",
            f"  💵 Initial amount: {investment.initial_amount:.2f}",
        ]
        change = investment.current_change_percent
        if change is not None:
            lines.append(f"  📊 Current value:  {investment.current_value:.2f} "
                         f"{self._format_change(change)}")
        lines += [
            f"  🎯 Projected in {investment.time_horizon_years:g} years: {analysis.projected_value:.2f}",
            f"  📈 ROI: {analysis.roi:.2f}%",
            f"  💹 Compounded return: {analysis.compounded_return:.2f}%",
            f"  ⚖️  Risk-adjusted return: {analysis.risk_adjusted_return:.2f}",
            f"  🎲 Risk level: {self._risk_icon(investment.risk_level)} {investment.risk_level.value}",
            "",
        ]
        lines += self._bullets("⚠️  WARNINGS:", analysis.warnings, YELLOW)
        lines += self._bullets("💡 RECOMMENDATIONS:", analysis.recommendations, CYAN)
        return "\n".join(lines)

    def format_bias_warnings(self, warnings: List[str]) -> str:
        if not warnings:
            return ""
        lines = [self._c(YELLOW, "🧠 COGNITIVE BIASES:"), ""]
        lines += [f"  {self._c(YELLOW, w)}" for w in warnings]
        return "\n".join(lines)

    def format_sanity_warnings(self, warnings: List[str]) -> str:
        if not warnings:
            return ""
        lines = [self._c(YELLOW, "⚠️  Warnings:")]
        lines += [f"  {self._c(YELLOW, '• ' + w)}" for w in warnings]
        return "\n".join(lines)

    def format_purchase_list(self, purchases: List[Purchase]) -> str:
        if not purchases:
            return self._c(YELLOW, "⚠️  No purchases found")
        lines = [self._c(CYAN, "📋 Purchases:"), ""]
        for p in purchases:
            lines.append(self._c(BOLD, f"[{p.id[:ID_PREFIX_LENGTH]}] {p.name}"))
            lines.append(f"  Price: {p.price:.2f} | Category: {p.category} | "
                         f"Date: {p.date.strftime('%Y-%m-%d')}")
            lines.append("")
        return "\n".join(lines)

    def format_investment_list(self, investments: List[Investment]) -> str:
        if not investments:
            return self._c(YELLOW, "⚠️  No investments found")
        lines = [self._c(CYAN, "📊 Investments:"), ""]
        for i in investments:
            current = i.current_value if i.current_value is not None else i.initial_amount
            change = (current - i.initial_amount) / i.initial_amount * 100
            lines.append(self._c(BOLD, f"[{i.id[:ID_PREFIX_LENGTH]}] {i.name}"))
            lines.append(f"  Type: {i.type.value} | Risk: {i.risk_level.value}")
            lines.append(f"  Initial: {i.initial_amount:.2f} | Current: {current:.2f} "
                         f"{self._format_change(change)}")
            lines.append("")
        return "\n".join(lines)

    def success(self, message: str) -> str:
        return self._c(GREEN, f"✅ {message}")

    def error(self, message: str) -> str:
        return self._c(RED, f"❌ {message}")

    def _format_change(self, change: float) -> str:
        text = f"({change:+.2f}%)"
        if change > 0:
            return self._c(GREEN, text)
        elif change < 0:
            return self._c(RED, text)
        return text

    @staticmethod
    def _risk_icon(risk: RiskLevel) -> str:
        return {
            RiskLevel.LOW: "🟢",
            RiskLevel.MEDIUM: "🟡",
            RiskLevel.HIGH: "🔴",
        }[risk]
