# routes_catalogues.py
"""Catalogues: named lists of inventory item ids.

`items` arrives as strings ("12") and is stored as integers. Entries that
don't parse are dropped without failing the request.
"""

from lalitha.core.schemas import CATALOGUE
from lalitha.api.dashboard import bp
from lalitha.api.resources import SqlResource, register_crud

catalogues = SqlResource("catalogue", "catalogues", "catalogues", CATALOGUE)

register_crud(bp, "/api/catalogues", catalogues, public_read=True)
