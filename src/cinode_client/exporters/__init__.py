"""Human-facing artifacts: Excel workbooks and resume PDFs."""

from cinode_client.exporters.excel import build_candidate_rows, export_candidates_to_excel
from cinode_client.exporters.pdf import DownloadResult, ResumePdfDownloader

__all__ = [
    "DownloadResult",
    "ResumePdfDownloader",
    "build_candidate_rows",
    "export_candidates_to_excel",
]
