"""
Lalitha Back-Office — HTML Templates
Server-rendered shells for the admin pages. Data is fetched from /api/* in the browser.
"""

BASE_CSS = """
:root{--bg:#faf7fb;--sf:#fff;--sf2:#f3ecf5;--bd:#e2d5e6;--tx:#2b1d2f;--tx2:#7a6a7e;
--ac:#800080;--ac2:#5e005e;--gn:#15803d;--yl:#b45309;--rd:#b91c1c;--r:10px}
*{margin:0;padding:0;box-sizing:border-box}
body{font-family:system-ui,sans-serif;background:var(--bg);color:var(--tx);min-height:100vh}
a{color:var(--ac);text-decoration:none}
.hdr{background:var(--sf);border-bottom:2px solid var(--bd);padding:14px 28px;display:flex;justify-content:space-between;align-items:center;flex-wrap:wrap;gap:12px}
.hdr h1{font-size:17px;font-weight:600;color:var(--ac)}
.hdr-nav{display:flex;gap:6px;flex-wrap:wrap}
.hdr-btn{padding:6px 12px;font-size:12px;font-weight:600;border-radius:6px;border:1px solid var(--bd);background:var(--sf2);color:var(--tx)}
.hdr-btn:hover,.hdr-active{border-color:var(--ac);color:var(--ac)}
.ctr{max-width:1400px;margin:0 auto;padding:20px 28px}
.bento{display:grid;gap:14px;grid-template-columns:repeat(4,1fr)}
.card{background:var(--sf);border:1px solid var(--bd);border-radius:var(--r);padding:20px;margin-bottom:16px}
.card-t{font-size:12px;font-weight:600;color:var(--tx2);text-transform:uppercase;letter-spacing:1px;margin-bottom:10px}
.stat{font-size:28px;font-weight:700}
.tbl{width:100%;border-collapse:collapse;font-size:13px}
.tbl th{text-align:left;padding:8px 10px;font-size:10px;color:var(--tx2);text-transform:uppercase;border-bottom:1px solid var(--bd)}
.tbl td{padding:8px 10px;border-bottom:1px solid var(--sf2)}
.login{max-width:360px;margin:80px auto}
.login input{width:100%;padding:10px;margin-bottom:10px;border:1px solid var(--bd);border-radius:6px}
.btn{padding:10px 16px;border:0;border-radius:6px;background:var(--ac);color:#fff;font-weight:600;cursor:pointer;width:100%}
.err{color:var(--rd);font-size:13px;margin-bottom:8px;min-height:16px}
"""

SECTIONS = {
    "inventory":  {"title": "Inventory",  "api": "/api/inventory",
                   "cols": [("dressName", "Name"), ("dressCode", "Code"), ("dressType", "Type"),
                            ("sellingPrice", "Price"), ("currentStock", "Stock")]},
    "sales":      {"title": "Sales",      "api": "/api/sales",
                   "cols": [("date", "Date"), ("billNumber", "Bill"), ("partyName", "Party"),
                            ("totalAmount", "Total"), ("paymentMode", "Payment")]},
    "customers":  {"title": "Customers",  "api": "/api/customers",
                   "cols": [("name", "Name"), ("phone", "Phone"), ("email", "Email")]},
    "suppliers":  {"title": "Suppliers",  "api": "/api/suppliers",
                   "cols": [("name", "Name"), ("phone", "Phone"), ("gstNumber", "GST")]},
    "purchases":  {"title": "Purchases",  "api": "/api/purchases",
                   "cols": [("date", "Date"), ("supplierName", "Supplier"), ("productName", "Product"),
                            ("quantity", "Qty"), ("totalAmount", "Total")]},
    "catalogues": {"title": "Catalogues", "api": "/api/catalogues",
                   "cols": [("name", "Name"), ("description", "Description")]},
    "enquiries":  {"title": "Enquiries",  "api": "/api/enquiries",
                   "cols": [("createdAt", "Received"), ("customerName", "Customer"),
                            ("customerPhone", "Phone"), ("productName", "Product"), ("status", "Status")]},
    "business":   {"title": "Business Profile", "api": "/api/business",
                   "cols": [("businessName", "Business"), ("ownerName", "Owner"),
                            ("phone", "Phone"), ("gstNumber", "GST")]},
}

PAGE_LOGIN = """
<div class="login card">
 <div class="card-t">Admin Login</div>
 <div class="err" id="err"></div>
 <input id="email" type="email" placeholder="Email" autocomplete="username">
 <input id="password" type="password" placeholder="Password" autocomplete="current-password">
 <button class="btn" onclick="login()">Sign in</button>
</div>
<script>
function login(){
 const err=document.getElementById('err');err.textContent='';
 fetch('/api/auth/login',{method:'POST',headers:{'Content-Type':'application/json'},
  body:JSON.stringify({email:document.getElementById('email').value,password:document.getElementById('password').value})})
 .then(r=>r.json()).then(d=>{if(d.success){location.href='/admin/dashboard'}else{err.textContent=d.message||'Login failed'}})
 .catch(()=>{err.textContent='Server error'});
}
document.addEventListener('keydown',e=>{if(e.key==='Enter')login()});
</script>
"""

PAGE_DASHBOARD = """
<div class="bento">
 {% for label, value in stats %}
 <div class="card"><div class="card-t">{{ label }}</div><div class="stat">{{ value }}</div></div>
 {% endfor %}
</div>
"""

PAGE_SECTION = """
<div class="card">
 <div class="card-t">{{ section.title }}</div>
 <table class="tbl"><thead><tr>{% for key, label in section.cols %}<th>{{ label }}</th>{% endfor %}</tr></thead>
 <tbody id="rows"><tr><td colspan="{{ section.cols|length }}">Loading…</td></tr></tbody></table>
</div>
<script>
const COLS={{ section.cols|map('first')|list|tojson }};
fetch({{ section.api|tojson }}).then(r=>r.json()).then(d=>{
 const tb=document.getElementById('rows');tb.innerHTML='';
 const rows=d.data==null?[]:(Array.isArray(d.data)?d.data:[d.data]);
 if(!d.success){tb.innerHTML='<tr><td>'+(d.message||'Failed to load')+'</td></tr>';return}
 rows.forEach(row=>{const tr=document.createElement('tr');
  COLS.forEach(k=>{const td=document.createElement('td');td.textContent=row[k]??'';tr.appendChild(td)});
  tb.appendChild(tr)});
 if(!rows.length)tb.innerHTML='<tr><td colspan="'+COLS.length+'">Nothing here yet</td></tr>';
});
</script>
"""
