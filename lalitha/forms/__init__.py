"""
Document generators.

    invoice_generator — sale invoice PDFs (reportlab)
"""
