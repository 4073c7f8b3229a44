"""
Lalitha Garments — Back-Office Service

Packages:
    api/           Blueprint, JSON envelope, resource handlers and route modules
    core/          Paths, SQLite layer, document storage, normalizer, security
    forms/         PDF generation (sale invoices)
    integrations/  External services (Cloudinary image host)
"""
