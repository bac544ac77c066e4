"""CSV export of the baseline ledger."""

import csv
import io

from premium_finance.schemas.projection import FundSource, SimulationOutput


def export_projection_csv(output: SimulationOutput, fund_source: FundSource = "cash") -> str:
    include_mortgage = fund_source == "mortgage"

    headers = [
        "Year",
        "Cum. Bond Interest",
        "Cash Reserve",
        "Bond Principal (Net)",
        "Policy Cash Value",
        "Total Loan",
        "Cum. Loan Interest",
    ]
    if include_mortgage:
        headers += ["Mortgage Balance", "Annual Mtg Pmt"]
    headers.append("Net Equity")

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for row in output.projectionData:
        values = [
            row.cumulativeBondInterest,
            row.cashValue,
            row.bondPrincipal,
            row.surrenderValue,
            row.loan,
            row.cumulativeInterest,
        ]
        if include_mortgage:
            values += [row.mortgageBalance, row.annualMortgagePayment]
        values.append(row.netEquity)
        writer.writerow([row.year] + [f"{value:.2f}" for value in values])

    return buffer.getvalue()
