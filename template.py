HTML_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Configuration Editor</title>
<meta name="viewport" content="width=device-width, initial-scale=1">
<style>
  :root{--bg:#fff;--ink:#0b0f17;--muted:#6b7280;--line:#e5e7eb;--bad:#b91c1c;--bad-bg:#fee2e2;--ok:#15803d;--ok-bg:#dcfce7}
  html,body{margin:0;padding:0;background:var(--bg);color:var(--ink);font:14px/1.4 system-ui,-apple-system,Segoe UI,Roboto,Arial,"Noto Sans",sans-serif}
  .container{max-width:1400px;margin:0 auto;padding:16px}
  header{display:flex;align-items:flex-end;justify-content:space-between;gap:12px;margin-bottom:12px}
  h1{font-size:20px;margin:0}
  h2{font-size:16px;margin:0 0 8px}
  .desc{color:var(--muted);font-size:12px}
  .controls{display:flex;gap:8px}
  .btn{border:1px solid var(--line);background:#f8fafc;color:#111827;border-radius:6px;padding:6px 10px;cursor:pointer}
  .btn.primary{background:#2563eb;border-color:#2563eb;color:#fff}
  .btn.save{background:#16a34a;border-color:#16a34a;color:#fff}
  .msg{margin-bottom:12px;padding:8px 12px;border-radius:6px;display:none}
  .msg.err{display:block;background:var(--bad-bg);color:var(--bad)}
  .msg.ok{display:block;background:var(--ok-bg);color:var(--ok)}
  .table-wrap{overflow-x:auto}
  table{width:100%;border-collapse:collapse}
  thead th{background:#fafafa;border-bottom:1px solid var(--line);padding:8px;text-align:left;font-size:12px;color:#374151;white-space:nowrap}
  tbody td{border-bottom:1px solid var(--line);padding:4px 8px}
  tbody tr:hover{background:#fbfbfd}
  .locked{color:var(--muted)}
  input.cell-input,select.cell-input{box-sizing:border-box;border:1px solid var(--line);border-radius:4px;padding:4px;font:inherit}
  input.label-input{width:100%;min-width:160px}
  input.seq-input{width:64px;text-align:right}
  .preview{margin-top:16px;padding:12px;background:#f9fafb;border-radius:8px}
  pre{white-space:pre-wrap;font:12px/1.4 ui-monospace,Menlo,Consolas,monospace;margin:0}
</style>
</head>
<body>
<div class="container">
  <header>
    <div>
      <h1>Configuration Editor</h1>
      <div class="desc">Field definitions and per-view sequence numbers. Sequence numbers must be unique within each view.</div>
    </div>
    <div class="controls">
      <button class="btn primary" id="addBtn" aria-label="Add new field">+ Add Field</button>
      <button class="btn save" id="saveBtn" aria-label="Save configuration">Save</button>
      <button class="btn primary" id="downloadBtn" aria-label="Download CSV">Download</button>
    </div>
  </header>

  <div class="msg" id="msg" role="alert"></div>

  <section class="table-wrap" id="grid"></section>

  <section class="preview">
    <h2>Current CSV Content</h2>
    <pre id="csvPreview"></pre>
  </section>

  <form id="downloadForm" method="post" action="/api/config/download" style="display:none">
    <textarea name="content" id="downloadContent"></textarea>
  </form>
</div>

<script id="cfg-json" type="application/json">{CFG_JSON}</script>

<script>
/* ---------- Read injected config ---------- */
const CONFIG = JSON.parse(document.getElementById('cfg-json').textContent);

/* ---------- State ---------- */
let STATE = { content: '', header: [], records: [] };

function showMessage(text, kind){
  const el = document.getElementById('msg');
  el.textContent = text || '';
  el.className = 'msg' + (text ? ' ' + (kind || 'err') : '');
}

async function postJSON(url, body){
  const res = await fetch(url, {
    method: 'POST',
    headers: { 'Content-Type': 'application/json' },
    body: JSON.stringify(body),
  });
  let data = {};
  try{ data = await res.json(); }catch(_){ data = {}; }
  return { ok: res.ok, data };
}

function applyPayload(data){
  STATE = {
    content: data.content || '',
    header: data.header || [],
    records: data.records || [],
  };
  if((data.missing_columns || []).length){
    showMessage('Missing columns: ' + data.missing_columns.join(', '));
  }
}

/* ---------- Rendering ---------- */
function el(tag, attrs, text){
  const node = document.createElement(tag);
  Object.entries(attrs || {}).forEach(([k, v]) => {
    if(k === 'className'){ node.className = v; } else { node.setAttribute(k, v); }
  });
  if(text !== undefined){ node.textContent = text; }
  return node;
}

function typeCell(record){
  const td = el('td');
  const current = record.field_type || '';
  if(CONFIG.lockedTypes.includes(current)){
    td.appendChild(el('span', {className: 'locked'}, current));
    return td;
  }
  const select = el('select', {className: 'cell-input', 'aria-label': 'Field type for ' + record.Field_Code});
  select.appendChild(el('option', {value: ''}, 'Select Type'));
  CONFIG.fieldTypes.forEach(t => {
    const opt = el('option', {value: t.value}, t.label);
    if(t.value === current){ opt.selected = true; }
    select.appendChild(opt);
  });
  select.dataset.code = record.Field_Code;
  select.dataset.column = 'field_type';
  select.dataset.previous = current;
  td.appendChild(select);
  return td;
}

function inputCell(record, column, cls, type){
  const td = el('td');
  const input = el('input', {className: 'cell-input ' + cls, type: type});
  if(type === 'number'){ input.min = '1'; }
  input.value = record[column] || '';
  input.setAttribute('aria-label', column + ' for ' + record.Field_Code);
  input.dataset.code = record.Field_Code;
  input.dataset.column = column;
  input.dataset.previous = input.value;
  td.appendChild(input);
  return td;
}

function render(){
  const root = document.getElementById('grid');
  const table = el('table');
  const thead = el('thead');
  const trh = el('tr');
  ['Field Code', 'Type', 'Label', ...CONFIG.displayParams].forEach(h => trh.appendChild(el('th', {}, h)));
  thead.appendChild(trh);

  const tbody = el('tbody');
  STATE.records.forEach(record => {
    const tr = el('tr');
    tr.appendChild(el('td', {}, record.Field_Code));
    tr.appendChild(typeCell(record));
    tr.appendChild(inputCell(record, 'label', 'label-input', 'text'));
    CONFIG.displayParams.forEach(p => tr.appendChild(inputCell(record, p, 'seq-input', 'number')));
    tbody.appendChild(tr);
  });

  table.appendChild(thead);
  table.appendChild(tbody);
  root.innerHTML = '';
  root.appendChild(table);
  bindInputs();
  renderPreview();
}

function renderPreview(){
  document.getElementById('csvPreview').textContent = STATE.content;
}

function bindInputs(){
  document.querySelectorAll('.cell-input').forEach(node => {
    node.addEventListener('change', onEdit);
  });
}

/* ---------- Actions ---------- */
async function loadConfig(){
  try{
    const res = await fetch('/api/config/read');
    const data = await res.json();
    if(!res.ok){ throw new Error(data.error); }
    showMessage('');
    applyPayload(data);
    render();
  }catch(_){
    showMessage('Failed to load configuration');
  }
}

/* Draft operations run one at a time so each request starts from the
   content produced by the previous response. */
let PENDING = Promise.resolve();
function enqueue(task){
  PENDING = PENDING.then(task).catch(() => { showMessage('Request failed'); });
  return PENDING;
}

function onEdit(e){
  const target = e.currentTarget;
  const edit = {
    field_code: target.dataset.code,
    column: target.dataset.column,
    value: target.value,
  };
  showMessage('');
  enqueue(async () => {
    const { ok, data } = await postJSON('/api/fields/set', { content: STATE.content, ...edit });
    if(!ok){
      if(target.value === edit.value){ target.value = target.dataset.previous; }
      showMessage(data.error || 'Failed to update field');
      return;
    }
    target.dataset.previous = edit.value;
    applyPayload(data);
    renderPreview();
  });
}

function addField(){
  showMessage('');
  enqueue(async () => {
    const { ok, data } = await postJSON('/api/fields/add', { content: STATE.content });
    if(!ok){ showMessage(data.error || 'Failed to add field'); return; }
    applyPayload(data);
    render();
  });
}

function saveConfig(){
  enqueue(async () => {
    try{
      const { ok } = await postJSON('/api/config/save', { content: STATE.content });
      if(!ok){ throw new Error(); }
      showMessage('Configuration saved', 'ok');
    }catch(_){
      showMessage('Failed to save configuration');
    }
  });
}

function downloadCSV(){
  enqueue(async () => {
    document.getElementById('downloadContent').value = STATE.content;
    document.getElementById('downloadForm').submit();
  });
}

document.addEventListener('click', (e) => {
  if(!e.target){ return; }
  if(e.target.id === 'addBtn'){ addField(); }
  if(e.target.id === 'saveBtn'){ saveConfig(); }
  if(e.target.id === 'downloadBtn'){ downloadCSV(); }
});

/* ---------- Boot ---------- */
enqueue(loadConfig);
</script>
</body>
</html>
"""
