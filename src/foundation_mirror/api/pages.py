"""Minimal kiosk and dashboard pages that consume the JSON API."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def kiosk_page() -> HTMLResponse:
    """Upload, derender, and try on foundation shades."""
    return HTMLResponse(_KIOSK_HTML)


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page() -> HTMLResponse:
    """Browse recorded sessions."""
    return HTMLResponse(_DASHBOARD_HTML)


_KIOSK_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Foundation Mirror</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      .row { margin-bottom: 1rem; }
      .images img { max-width: 32%; margin-right: 1%; }
      .shades button {
        width: 4rem; height: 4rem; margin: 0.2rem; border: 2px solid #ccc;
      }
      .shades button.suggested { border-color: #7c3aed; }
      .shades button.selected { outline: 3px solid #111; }
      #status { color: #555; }
    </style>
  </head>
  <body>
    <h1>Foundation Mirror</h1>
    <div class="row"><input id="file" type="file" accept="image/*" /></div>
    <div class="row" id="status">Choose a portrait to begin.</div>
    <div class="row images">
      <img id="original" alt="" />
      <img id="derendered" alt="" />
      <img id="tryon" alt="" />
    </div>
    <div class="row shades" id="shades"></div>
    <script>
      const state = {
        derendered: null, mimeType: null, sessionId: null, suggested: [],
      };
      const statusEl = document.getElementById('status');

      function compressImage(file, maxWidth, quality) {
        return new Promise((resolve, reject) => {
          const reader = new FileReader();
          reader.onerror = reject;
          reader.onload = () => {
            const img = new Image();
            img.onerror = reject;
            img.onload = () => {
              let width = img.width;
              let height = img.height;
              if (width > maxWidth) {
                height = (height * maxWidth) / width;
                width = maxWidth;
              }
              const canvas = document.createElement('canvas');
              canvas.width = width;
              canvas.height = height;
              canvas.getContext('2d').drawImage(img, 0, 0, width, height);
              resolve(canvas.toDataURL('image/jpeg', quality).split(',')[1]);
            };
            img.src = reader.result;
          };
          reader.readAsDataURL(file);
        });
      }

      async function postJson(path, body) {
        const res = await fetch(path, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(body),
        });
        if (!res.ok) throw new Error('Request failed: ' + res.status);
        return res.json();
      }

      async function loadShades() {
        const res = await fetch('/foundations');
        const data = await res.json();
        const container = document.getElementById('shades');
        container.innerHTML = '';
        for (const shade of data.foundations) {
          const button = document.createElement('button');
          button.style.background = shade.hex;
          button.title = shade.name + ' (' + shade.undertone + ')';
          button.textContent = shade.sku;
          if (state.suggested.includes(shade.sku)) button.classList.add('suggested');
          button.onclick = () => applyShade(shade, button);
          container.appendChild(button);
        }
      }

      async function derender(file) {
        statusEl.textContent = 'Removing makeup...';
        try {
          const base64 = await compressImage(file, 800, 0.75);
          document.getElementById('original').src = 'data:image/jpeg;base64,' + base64;
          const data = await postJson('/derender', {
            image: base64, mimeType: 'image/jpeg',
          });
          if (!data.image) throw new Error(data.error || 'No image');
          state.derendered = data.image;
          state.mimeType = data.mimeType;
          state.sessionId = data.sessionId || null;
          state.suggested = data.suggestedFoundations || [];
          document.getElementById('derendered').src =
            'data:' + data.mimeType + ';base64,' + data.image;
          statusEl.textContent = 'Pick a shade to try on.';
          await loadShades();
        } catch (err) {
          statusEl.textContent = '';
          alert('Something went wrong. Please try again.');
        }
      }

      async function applyShade(shade, button) {
        if (!state.derendered || !state.sessionId) {
          alert('Could not apply foundation. Please try again.');
          return;
        }
        document.querySelectorAll('.shades button')
          .forEach((b) => b.classList.remove('selected'));
        button.classList.add('selected');
        statusEl.textContent = 'Applying ' + shade.name + '...';
        try {
          const data = await postJson('/apply-foundation', {
            image: state.derendered,
            mimeType: state.mimeType,
            foundation: shade,
            sessionId: state.sessionId,
          });
          if (!data.image) throw new Error(data.error || 'No image');
          document.getElementById('tryon').src =
            'data:' + data.mimeType + ';base64,' + data.image;
          statusEl.textContent = shade.name + ' applied.';
        } catch (err) {
          statusEl.textContent = '';
          alert('Could not apply foundation. Please try again.');
        }
      }

      document.getElementById('file').addEventListener('change', (event) => {
        const file = event.target.files[0];
        if (file) derender(file);
      });
    </script>
  </body>
</html>
"""

_DASHBOARD_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Foundation Mirror Sessions</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      .row { margin-bottom: 1rem; }
      input { padding: 0.4rem 0.6rem; width: 320px; }
      li { cursor: pointer; margin-bottom: 0.3rem; }
      img { max-width: 240px; margin-right: 0.5rem; }
      .swatch {
        display: inline-block; width: 1rem; height: 1rem; vertical-align: middle;
      }
    </style>
  </head>
  <body>
    <h1>Sessions</h1>
    <div class="row">
      <label>Dashboard token (if configured)</label><br />
      <input id="token" type="password" placeholder="X-Dashboard-Token" />
      <button onclick="loadSessions()">Load</button>
    </div>
    <ul id="sessions"></ul>
    <div id="detail"></div>
    <script>
      function headers() {
        const token = document.getElementById('token').value;
        return token ? { 'X-Dashboard-Token': token } : {};
      }

      async function loadSessions() {
        const list = document.getElementById('sessions');
        list.textContent = 'Loading...';
        const res = await fetch('/sessions', { headers: headers() });
        if (!res.ok) {
          list.textContent = 'Error: ' + res.status;
          return;
        }
        const data = await res.json();
        list.innerHTML = '';
        if (!data.sessions.length) list.textContent = 'No sessions yet.';
        for (const session of data.sessions) {
          const item = document.createElement('li');
          item.textContent = new Date(session.createdAt).toLocaleString() +
            ' - ' + session.foundationTryons.length + ' try-ons';
          item.onclick = () => loadSession(session.id);
          list.appendChild(item);
        }
      }

      async function loadSession(id) {
        const detail = document.getElementById('detail');
        const res = await fetch('/sessions/' + encodeURIComponent(id), {
          headers: headers(),
        });
        if (!res.ok) {
          detail.textContent = 'Error: ' + res.status;
          return;
        }
        const { session } = await res.json();
        detail.innerHTML = '';
        for (const url of [session.originalImageUrl, session.derenderedImageUrl]) {
          const img = document.createElement('img');
          img.src = url;
          detail.appendChild(img);
        }
        for (const tryon of session.foundationTryons) {
          const block = document.createElement('div');
          const swatch = document.createElement('span');
          swatch.className = 'swatch';
          swatch.style.background = tryon.hex;
          block.appendChild(swatch);
          block.append(' ' + tryon.name + ' (' + tryon.undertone + ') ');
          const img = document.createElement('img');
          img.src = tryon.resultImageUrl;
          block.appendChild(img);
          detail.appendChild(block);
        }
      }
    </script>
  </body>
</html>
"""
