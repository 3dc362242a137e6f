# rentshares/formatting.py


def format_dollars(amount):
    """Format ``amount`` as ``$1,234.56``."""
    sign = "-" if round(amount, 2) < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_percentage(value):
    return f"{value:.2f}%"


def build_table(allocation):
    """Turn an engine ``Allocation`` into the JSON results table."""
    rows = []
    for result in allocation.results:
        participant = result.participant
        rows.append({
            "name": participant.name,
            "limited": participant.limited,
            "incomeType": participant.income.income_type,
            "grossMonthlyIncome": result.gross_monthly_income,
            "grossMonthlyIncomeFormatted": format_dollars(result.gross_monthly_income),
            "percentageOfTotal": result.percentage_of_total,
            "percentageOfTotalFormatted": format_percentage(result.percentage_of_total),
            "amountDue": result.amount_due,
            "amountDueFormatted": format_dollars(result.amount_due),
            "adjustedDue": result.adjusted_due,
            "adjustedDueFormatted": format_dollars(result.adjusted_due),
        })

    return {
        "totalGross": allocation.total_gross,
        "totalGrossFormatted": format_dollars(allocation.total_gross),
        "results": rows,
    }
