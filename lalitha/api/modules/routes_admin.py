# routes_admin.py
"""
Admin pages.

The route gate has already redirected cookie-less requests by the time these
run; here the cookie is verified and a bad one is cleared before sending the
browser back to the login page.
"""

import logging
import functools
from datetime import date

from flask import abort, make_response, redirect, render_template_string

from lalitha.core import db
from lalitha.core.security import DASHBOARD_PATH, LOGIN_PATH, SESSION_COOKIE, current_session
from lalitha.core.storage import get_storage
from lalitha.api.dashboard import bp
from lalitha.api.templates import BASE_CSS, PAGE_DASHBOARD, PAGE_LOGIN, PAGE_SECTION, SECTIONS

log = logging.getLogger("lalitha.admin")


def render(content, active="", **kw):
    nav = "".join(
        f'<a class="hdr-btn{" hdr-active" if key == active else ""}" href="/admin/{key}">{s["title"]}</a>'
        for key, s in SECTIONS.items())
    html = f"""<!DOCTYPE html><html><head><meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>Lalitha Garments Admin</title>
<style>{BASE_CSS}</style></head><body>
<div class="hdr"><h1><a href="{DASHBOARD_PATH}" style="color:inherit">Lalitha Garments</a></h1>
<div class="hdr-nav">{nav}<a class="hdr-btn" href="#" onclick="fetch('/api/auth/logout',{{method:'POST'}}).then(()=>location.href='{LOGIN_PATH}')">Logout</a></div></div>
<div class="ctr">
""" + content + """
</div></body></html>"""
    return render_template_string(html, **kw)


def admin_page(f):
    """Decorator: verified session or back to the login page with the cookie cleared."""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        if current_session() is None:
            log.info("Admin page with invalid session, clearing cookie")
            resp = make_response(redirect(LOGIN_PATH))
            resp.delete_cookie(SESSION_COOKIE)
            return resp
        return f(*args, **kwargs)
    return wrapper


def dashboard_stats() -> list:
    store = get_storage()
    inventory = store.list("inventory")
    month = date.today().strftime("%Y-%m")
    sales = [s for s in store.list("sales") if (s.get("date") or "").startswith(month)]
    pending = db.fetch_one(
        "SELECT COUNT(*) AS n FROM customer_enquiries WHERE status='pending'")["n"]
    return [
        ("Products", len(inventory)),
        ("Units in stock", sum(i.get("current_stock") or 0 for i in inventory)),
        ("Sales this month", f"{sum(s.get('total_amount') or 0 for s in sales):,.2f}"),
        ("Pending enquiries", pending),
    ]


@bp.route("/admin")
def admin_root():
    return redirect(DASHBOARD_PATH)


@bp.route("/admin/login")
def admin_login():
    html = f"""<!DOCTYPE html><html><head><meta charset="utf-8">
<title>Admin Login</title><style>{BASE_CSS}</style></head><body>{PAGE_LOGIN}</body></html>"""
    return render_template_string(html)


@bp.route("/admin/dashboard")
@admin_page
def admin_dashboard():
    return render(PAGE_DASHBOARD, stats=dashboard_stats())


@bp.route("/admin/<section>")
@admin_page
def admin_section(section):
    if section not in SECTIONS:
        abort(404)
    return render(PAGE_SECTION, active=section, section=SECTIONS[section])
