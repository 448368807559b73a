MAIN_TEMPLATE = r"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Markdown Viewer</title>
<script src="https://cdn.jsdelivr.net/npm/marked/marked.min.js"></script>
<style>

*, *::before, *::after { box-sizing: border-box; }

:root {
  --bg: #0d1117;
  --panel: #161b22;
  --sidebar-bg: #010409;
  --border: #30363d;
  --text: #c9d1d9;
  --muted: #8b949e;
  --link: #58a6ff;
  --active: #1f6feb33;
  --button-bg: #21262d;
  --button-hover: #30363d;
  --font: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif;
  --font-mono: "Fira Code", "JetBrains Mono", Consolas, monospace;
}

:root[data-theme="light"] {
  --bg: #f6f8fa;
  --panel: #ffffff;
  --sidebar-bg: #ffffff;
  --border: #d0d7de;
  --text: #24292f;
  --muted: #57606a;
  --link: #0969da;
  --active: #0969da1a;
  --button-bg: #f6f8fa;
  --button-hover: #eaeef2;
}

body { margin: 0; font-family: var(--font); background: var(--bg); color: var(--text); }
a { color: var(--link); }

.app { display: grid; grid-template-columns: 300px minmax(0, 1fr); min-height: 100vh; }
.app.sidebar-hidden { grid-template-columns: minmax(0, 1fr); }
.app.sidebar-hidden .sidebar { display: none; }

.sidebar { border-right: 1px solid var(--border); background: var(--sidebar-bg); padding: 16px; overflow-y: auto; max-height: 100vh; position: sticky; top: 0; }
.root-path { font-size: 12px; color: var(--muted); word-break: break-all; margin-bottom: 12px; }
.toolbar { display: flex; gap: 6px; flex-wrap: wrap; margin-bottom: 10px; }

.btn { background: var(--button-bg); color: var(--text); border: 1px solid var(--border); border-radius: 6px; padding: 4px 10px; font-size: 12px; cursor: pointer; }
.btn:hover { background: var(--button-hover); }

.search-input, .tag-filter { width: 100%; padding: 6px 8px; border-radius: 6px; border: 1px solid var(--border); background: var(--panel); color: var(--text); margin-bottom: 8px; }

.dir-label { font-size: 12px; color: var(--muted); margin: 10px 0 2px; text-transform: uppercase; letter-spacing: .04em; }
.file-item { display: flex; align-items: center; gap: 6px; padding: 3px 6px; border-radius: 6px; cursor: pointer; font-size: 14px; }
.file-item:hover, .file-item.active { background: var(--active); }
.file-item.unopened .file-name { font-weight: 700; }
.file-name { overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }

.tag { font-size: 10px; padding: 1px 5px; border-radius: 8px; border: 1px solid var(--border); color: var(--muted); white-space: nowrap; }
.tag-DONE { color: #3fb950; border-color: #3fb950; }
.tag-IN-PROGRESS { color: #d29922; border-color: #d29922; }
.tag-NEXT { color: #58a6ff; border-color: #58a6ff; }
.tag-IMPORTANT { color: #f85149; border-color: #f85149; }
.tag-REVISIT { color: #bc8cff; border-color: #bc8cff; }
.tag-ARCHIVE { color: var(--muted); }

.search-result { padding: 6px; border-radius: 6px; cursor: pointer; margin-bottom: 4px; }
.search-result:hover { background: var(--active); }
.search-result .path { font-size: 13px; }
.search-result .context { font-size: 12px; color: var(--muted); }
.search-result mark { background: #bb800926; color: inherit; }

.content { padding: 24px 40px; max-width: 980px; }
.content-header { display: flex; align-items: center; gap: 8px; flex-wrap: wrap; border-bottom: 1px solid var(--border); padding-bottom: 8px; margin-bottom: 16px; }
.content-header .current { font-family: var(--font-mono); font-size: 13px; color: var(--muted); }
.markdown-body pre { background: var(--panel); padding: 12px; border-radius: 6px; overflow-x: auto; }
.markdown-body code { font-family: var(--font-mono); }
.markdown-body table { border-collapse: collapse; }
.markdown-body th, .markdown-body td { border: 1px solid var(--border); padding: 4px 8px; }
.empty { color: var(--muted); }

.tag-menu { position: fixed; background: var(--panel); border: 1px solid var(--border); border-radius: 6px; padding: 4px; z-index: 20; min-width: 160px; }
.tag-menu div { padding: 4px 8px; border-radius: 4px; cursor: pointer; font-size: 13px; }
.tag-menu div:hover { background: var(--active); }
.hidden { display: none; }
</style>
</head>
<body>
<div class="app" id="app">
  <aside class="sidebar">
    <div class="root-path">{{ root }}</div>
    <div class="toolbar">
      <button id="theme-btn" class="btn" type="button">Theme</button>
      <button id="archive-btn" class="btn" type="button" title="Move all ARCHIVE-tagged files to .archive folder">Archive</button>
      <button id="hide-btn" class="btn" type="button">Hide</button>
    </div>
    <input id="search-input" class="search-input" type="search" placeholder="Search contents...">
    <select id="tag-filter" class="tag-filter">
      <option value="">All files</option>
      {% for tag in tag_order %}<option value="{{ tag }}">{{ tag }}</option>{% endfor %}
    </select>
    <div id="search-results"></div>
    <div id="file-list"></div>
  </aside>
  <main class="content">
    <div class="content-header">
      <button id="show-btn" class="btn hidden" type="button">Files</button>
      <span class="current" id="current-path"></span>
      <span id="current-tags"></span>
    </div>
    <article id="viewer" class="markdown-body"><p class="empty">Select a file.</p></article>
  </main>
</div>
<div id="tag-menu" class="tag-menu hidden"></div>
<script>
const INITIAL_FILE = {{ initial_file|tojson }};
const TAG_ORDER = {{ tag_order|tojson }};

let files = [];
let fileTags = {};
let openedFiles = {};
let currentFile = '';

const appEl = document.getElementById('app');
const fileListEl = document.getElementById('file-list');
const viewerEl = document.getElementById('viewer');
const searchInput = document.getElementById('search-input');
const searchResultsEl = document.getElementById('search-results');
const tagFilterEl = document.getElementById('tag-filter');
const tagMenuEl = document.getElementById('tag-menu');

function escapeHtml(str) {
  return String(str).replace(/[&<>"']/g, c => ({'&': '&amp;', '<': '&lt;', '>': '&gt;', '"': '&quot;', "'": '&#39;'}[c]));
}

function tagBadges(path) {
  return (fileTags[path] || []).map(t => '<span class="tag tag-' + t + '">' + t + '</span>').join(' ');
}

async function loadIndex() {
  const [filesResp, tagsResp] = await Promise.all([fetch('/api/files'), fetch('/api/tags')]);
  if (!filesResp.ok) throw new Error('failed to list files');
  files = (await filesResp.json()).files;
  if (tagsResp.ok) {
    const data = await tagsResp.json();
    fileTags = data.tags || {};
    openedFiles = data.opened || {};
  }
  renderFileList();
}

function renderFileList() {
  const filter = tagFilterEl.value;
  let html = '';
  let lastDir = null;
  for (const path of files) {
    if (filter && !(fileTags[path] || []).includes(filter)) continue;
    const slash = path.lastIndexOf('/');
    const dir = slash >= 0 ? path.slice(0, slash) : '';
    if (dir !== lastDir) {
      if (dir) html += '<div class="dir-label">' + escapeHtml(dir) + '</div>';
      lastDir = dir;
    }
    const classes = ['file-item'];
    if (path === currentFile) classes.push('active');
    if (!openedFiles[path]) classes.push('unopened');
    html += '<div class="' + classes.join(' ') + '" data-path="' + escapeHtml(path) + '">' +
      '<span class="file-name">' + escapeHtml(path.slice(slash + 1)) + '</span>' + tagBadges(path) + '</div>';
  }
  fileListEl.innerHTML = html || '<p class="empty">No markdown files.</p>';
}

async function renderMarkdown(path, content) {
  if (window.marked) return window.marked.parse(content);
  const resp = await fetch('/api/render?path=' + encodeURIComponent(path));
  if (!resp.ok) throw new Error('failed to render file');
  return (await resp.json()).html;
}

async function openFile(path, pushState) {
  try {
    const resp = await fetch('/api/file?path=' + encodeURIComponent(path));
    if (!resp.ok) throw new Error((await resp.json()).error || 'failed to load file');
    const data = await resp.json();
    currentFile = data.path;
    viewerEl.innerHTML = await renderMarkdown(data.path, data.content);
    document.getElementById('current-path').textContent = data.path;
    document.getElementById('current-tags').innerHTML = tagBadges(data.path);
    if (pushState) history.pushState({file: data.path}, '', '?file=' + encodeURIComponent(data.path));
    if (!openedFiles[data.path]) {
      openedFiles[data.path] = true;
      fetch('/api/opened', {method: 'POST', headers: {'Content-Type': 'application/json'}, body: JSON.stringify({path: data.path})});
    }
    renderFileList();
  } catch (e) {
    viewerEl.innerHTML = '<p class="empty">' + escapeHtml(e.message) + '</p>';
  }
}

function highlightQuery(text, query) {
  const escaped = escapeHtml(text);
  const q = escapeHtml(query).replace(/[.*+?^$()|[\]\\]/g, '\\$&');
  return escaped.replace(new RegExp(q, 'gi'), m => '<mark>' + m + '</mark>');
}

let searchTimer = null;
searchInput.addEventListener('input', () => {
  clearTimeout(searchTimer);
  searchTimer = setTimeout(async () => {
    const query = searchInput.value.trim();
    if (!query) { searchResultsEl.innerHTML = ''; return; }
    const resp = await fetch('/api/search?q=' + encodeURIComponent(query));
    if (!resp.ok) return;
    const data = await resp.json();
    searchResultsEl.innerHTML = data.results.map(r =>
      '<div class="search-result" data-path="' + escapeHtml(r.path) + '"><div class="path">' + escapeHtml(r.path) +
      '</div><div class="context">' + highlightQuery(r.context, data.query) + '</div></div>'
    ).join('') || '<p class="empty">No matches.</p>';
  }, 250);
});

function itemPath(event) {
  const el = event.target.closest('[data-path]');
  return el ? el.dataset.path : null;
}

fileListEl.addEventListener('click', e => { const p = itemPath(e); if (p) openFile(p, true); });
searchResultsEl.addEventListener('click', e => { const p = itemPath(e); if (p) openFile(p, true); });
tagFilterEl.addEventListener('change', renderFileList);

async function setTag(path, tag, action) {
  const resp = await fetch('/api/tag', {
    method: 'POST',
    headers: {'Content-Type': 'application/json'},
    body: JSON.stringify({path, tag, action})
  });
  if (!resp.ok) return;
  await loadIndex();
  if (path === currentFile) document.getElementById('current-tags').innerHTML = tagBadges(path);
}

fileListEl.addEventListener('contextmenu', e => {
  const path = itemPath(e);
  if (!path) return;
  e.preventDefault();
  const current = fileTags[path] || [];
  tagMenuEl.innerHTML = TAG_ORDER.map(t =>
    '<div data-tag="' + t + '" data-action="' + (current.includes(t) ? 'remove' : 'add') + '">' +
    (current.includes(t) ? '&#10003; ' : '') + t + '</div>'
  ).join('') + '<div data-action="clear">Clear tags</div>';
  tagMenuEl.dataset.path = path;
  tagMenuEl.style.left = e.clientX + 'px';
  tagMenuEl.style.top = e.clientY + 'px';
  tagMenuEl.classList.remove('hidden');
});

tagMenuEl.addEventListener('click', e => {
  const item = e.target.closest('[data-action]');
  if (!item) return;
  tagMenuEl.classList.add('hidden');
  setTag(tagMenuEl.dataset.path, item.dataset.tag || '', item.dataset.action);
});

document.addEventListener('click', e => {
  if (!tagMenuEl.contains(e.target)) tagMenuEl.classList.add('hidden');
});

document.getElementById('archive-btn').addEventListener('click', async () => {
  const archiveFiles = files.filter(f => (fileTags[f] || []).includes('ARCHIVE'));
  if (archiveFiles.length === 0) { alert('No files tagged ARCHIVE.'); return; }
  if (!confirm('Move ' + archiveFiles.length + ' file(s) tagged ARCHIVE to .archive folder?')) return;
  const resp = await fetch('/api/archive', {
    method: 'POST',
    headers: {'Content-Type': 'application/json'},
    body: JSON.stringify({files: archiveFiles})
  });
  if (resp.ok) {
    const data = await resp.json();
    alert('Archived ' + data.moved + ' file(s).');
  }
  await loadIndex();
});

function applyTheme(theme) {
  document.documentElement.dataset.theme = theme;
  localStorage.setItem('mdviewer-theme', theme);
}
document.getElementById('theme-btn').addEventListener('click', () => {
  applyTheme(document.documentElement.dataset.theme === 'light' ? 'dark' : 'light');
});
applyTheme(localStorage.getItem('mdviewer-theme') || 'dark');

function setSidebarHidden(hidden) {
  appEl.classList.toggle('sidebar-hidden', hidden);
  document.getElementById('show-btn').classList.toggle('hidden', !hidden);
}
document.getElementById('hide-btn').addEventListener('click', () => setSidebarHidden(true));
document.getElementById('show-btn').addEventListener('click', () => setSidebarHidden(false));

window.addEventListener('popstate', e => {
  if (e.state && e.state.file) openFile(e.state.file, false);
});

loadIndex().then(() => {
  if (INITIAL_FILE) openFile(INITIAL_FILE, false);
}).catch(e => {
  fileListEl.innerHTML = '<p class="empty">' + escapeHtml(e.message) + '</p>';
});
</script>
</body>
</html>
"""
