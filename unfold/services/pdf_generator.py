"""Service for generating the CV PDF from HTML."""

from weasyprint import HTML as WeasyHTML, CSS
from unfold.services.cv_generator import CVGenerator
from unfold.models.portfolio_models import PortfolioData


class PDFGenerator:
    """Service to generate PDF from HTML using WeasyPrint."""

    def __init__(self, cv_generator: CVGenerator = None):
        """
        Initialize the PDF generator.

        Args:
            cv_generator: CV generator instance. If None, creates a new one.
        """
        if cv_generator is None:
            cv_generator = CVGenerator()
        self.cv_generator = cv_generator

    def generate_pdf(self, data: PortfolioData) -> bytes:
        """
        Generate the CV PDF.

        Args:
            data: Site document

        Returns:
            bytes: PDF file as bytes
        """
        html_content = self.cv_generator.generate_print_html(data)
        html = WeasyHTML(string=html_content)

        # A4 portrait, margins matching the print stylesheet
        page_css = CSS(string="""
            @page {
                size: A4;
                margin: 40px 50px;
            }
        """)

        return html.write_pdf(stylesheets=[page_css])
