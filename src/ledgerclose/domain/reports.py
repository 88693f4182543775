"""Statement data files written for each loaded fiscal year."""

import logging
from pathlib import Path

from ledgerclose.domain.ledger import Ledger
from ledgerclose.domain.statement import Statement

logger = logging.getLogger(__name__)


class StatementWriter:
    """Write tab-separated statement files into a directory."""

    def __init__(self, output_dir):
        self.output_dir = Path(output_dir)

    def write_year(self, ledger: Ledger, year: int) -> list[Path]:
        """Write the statement and detail files of one year.

        Returns:
            Paths of the files written
        """
        balance_sheet = Statement.balance_sheet(ledger, year)
        income_statement = Statement.income_statement(ledger, year)
        contents = {
            f"{year}_balance_sheet.txt": balance_sheet.to_data(),
            f"{year}_income_statement.txt": income_statement.to_data(),
            f"{year}_balance_sheet_details.txt": balance_sheet.to_detail_data(),
            f"{year}_income_statement_details.txt": income_statement.to_detail_data(),
        }

        self.output_dir.mkdir(parents=True, exist_ok=True)
        paths = []
        for filename, data in contents.items():
            path = self.output_dir / filename
            path.write_text(data, encoding="utf-8")
            paths.append(path)
        logger.info("Wrote statements for %s to %s", year, self.output_dir)
        return paths
