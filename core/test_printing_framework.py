"""
Tests for Core Printing Framework

Tests the printing framework components:
- PDF rendering service
- WeasyPrint renderer
- Footer notes sanitizer
- PDF output of composed invoices
"""

from unittest.mock import Mock

from django.test import SimpleTestCase, override_settings

from core.printing import PdfRenderService, PdfResult
from core.printing.interfaces import IPdfRenderer
from core.printing.sanitizer import sanitize_html
from core.services.invoicing import InvoiceRenderingEngine
from core.services.invoicing.defaults import default_schema

try:
    from core.printing.weasyprint_renderer import WeasyPrintRenderer
    WEASYPRINT_AVAILABLE = True
except (ImportError, OSError):
    # WeasyPrint also needs the Pango system libraries
    WEASYPRINT_AVAILABLE = False


class FakeRenderer(IPdfRenderer):
    def __init__(self):
        self.calls = []

    def render_html_to_pdf(self, html: str, base_url: str) -> bytes:
        self.calls.append((html, base_url))
        return b'%PDF-1.7 fake'


class PdfRenderServiceTestCase(SimpleTestCase):
    """Test cases for PdfRenderService"""

    def test_service_with_custom_renderer(self):
        """Test service with custom renderer"""
        renderer = FakeRenderer()
        service = PdfRenderService(renderer=renderer)
        self.assertIs(service.renderer, renderer)

    def test_render_returns_pdf_result(self):
        """Test that render returns a PdfResult object"""
        renderer = FakeRenderer()
        result = PdfRenderService(renderer=renderer).render(
            '<html><body>Invoice</body></html>',
            base_url='http://example.com/',
            filename='INV-0001.pdf'
        )

        self.assertIsInstance(result, PdfResult)
        self.assertEqual(result.filename, 'INV-0001.pdf')
        self.assertEqual(result.content_type, 'application/pdf')
        self.assertEqual(result.pdf_bytes, b'%PDF-1.7 fake')
        self.assertEqual(renderer.calls, [('<html><body>Invoice</body></html>', 'http://example.com/')])

    def test_render_with_default_filename(self):
        """Test that default filename is used if not provided"""
        result = PdfRenderService(renderer=FakeRenderer()).render('<p>x</p>')
        self.assertEqual(result.filename, 'document.pdf')

    @override_settings(INVOICING={'PDF_BASE_URL': 'http://static.example.com/'})
    def test_base_url_from_settings(self):
        renderer = FakeRenderer()
        PdfRenderService(renderer=renderer).render('<p>x</p>')
        self.assertEqual(renderer.calls[0][1], 'http://static.example.com/')

    def test_renderer_errors_propagate(self):
        renderer = Mock(spec=IPdfRenderer)
        renderer.render_html_to_pdf.side_effect = RuntimeError('boom')
        with self.assertLogs('core.printing.service', level='ERROR'):
            with self.assertRaises(RuntimeError):
                PdfRenderService(renderer=renderer).render('<p>x</p>')


class PdfResultTestCase(SimpleTestCase):
    """Test cases for PdfResult DTO"""

    def test_pdf_result_length(self):
        """Test __len__ returns byte count"""
        pdf_bytes = b'%PDF-1.4...'
        result = PdfResult(pdf_bytes=pdf_bytes, filename='test.pdf')

        self.assertEqual(len(result), len(pdf_bytes))
        self.assertEqual(result.content_disposition, 'inline; filename="test.pdf"')


class HtmlSanitizerTestCase(SimpleTestCase):
    """Test cases for HTML sanitizer"""

    def test_sanitize_allows_inline_formatting(self):
        sanitized = sanitize_html('<p>Thank <strong>you</strong><br>Come <em>again</em></p>')
        self.assertEqual(sanitized, '<p>Thank <strong>you</strong><br>Come <em>again</em></p>')

    def test_sanitize_removes_script_tags(self):
        sanitized = sanitize_html('<p>Safe</p><script>alert("xss")</script>')
        self.assertIn('<p>Safe</p>', sanitized)
        self.assertNotIn('<script>', sanitized)

    def test_sanitize_removes_block_layout(self):
        sanitized = sanitize_html('<table><tr><td>cell</td></tr></table><img src="x.png">')
        self.assertNotIn('<table>', sanitized)
        self.assertNotIn('<img', sanitized)
        self.assertIn('cell', sanitized)

    def test_sanitize_strict_mode(self):
        """Test strict mode removes inline styles"""
        sanitized = sanitize_html('<p style="color: red;">Styled text</p>', strict=True)
        self.assertNotIn('style=', sanitized)

    def test_sanitize_filters_css(self):
        sanitized = sanitize_html('<span style="color: red; position: fixed">x</span>')
        self.assertIn('color: red', sanitized)
        self.assertNotIn('position', sanitized)


class WeasyPrintRendererTestCase(SimpleTestCase):
    """Test cases for WeasyPrint renderer"""

    def setUp(self):
        if not WEASYPRINT_AVAILABLE:
            self.skipTest("WeasyPrint not available")

    def test_renderer_is_pdf_renderer(self):
        self.assertIsInstance(WeasyPrintRenderer(), IPdfRenderer)

    def test_render_invoice_to_pdf(self):
        """A composed invoice converts to a PDF document"""
        html = InvoiceRenderingEngine().render_preview(default_schema())
        pdf_bytes = WeasyPrintRenderer().render_html_to_pdf(html, base_url='')

        self.assertIsInstance(pdf_bytes, bytes)
        # PDF files start with %PDF
        self.assertTrue(pdf_bytes.startswith(b'%PDF'))

    def test_render_thermal_and_a4(self):
        engine = InvoiceRenderingEngine()
        for paper_size in ('Thermal58mm', 'A4'):
            result = PdfRenderService(renderer=WeasyPrintRenderer()).render(
                engine.render_preview(default_schema(paper_size)),
                filename=f'{paper_size}.pdf'
            )
            self.assertGreater(len(result), 0)
