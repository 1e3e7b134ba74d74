from __future__ import annotations

# ruff: noqa: E501
import json

from beadboard.client.palette import PALETTE


def render_viewer_html(board_id: str, cols: int, rows: int) -> str:
    """
    Developer viewer HTML (single page app).

    Click a cell to place the selected color; remote placements are painted as
    they arrive. Kept in a separate module so `app.py` stays focused on
    transport/relay logic.
    """
    return f"""
<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width,initial-scale=1" />
    <title>beadboard viewer: {board_id}</title>
    <style>
      html, body {{ height: 100%; margin: 0; background: #f0f0f0; color: #222; font-family: ui-sans-serif, system-ui, -apple-system; }}
      #bar {{ position: fixed; top: 0; left: 0; right: 0; padding: 10px 12px; background: rgba(255,255,255,0.85); backdrop-filter: blur(8px); border-bottom: 1px solid rgba(0,0,0,0.08); z-index: 2; }}
      #bar code {{ color: #0e639c; }}
      #status {{ font-size: 12px; opacity: 0.9; }}
      #palette {{ display: grid; grid-template-columns: repeat(16, 22px); gap: 4px; margin-top: 8px; }}
      #palette button {{ width: 22px; height: 22px; border-radius: 6px; border: 1px solid rgba(0,0,0,0.18); padding: 0; cursor: pointer; }}
      canvas {{ position: absolute; inset: 0; }}
    </style>
  </head>
  <body>
    <div id="bar">
      <div><strong>Board</strong>: <code>{board_id}</code> ({cols}x{rows})</div>
      <div id="status">connecting…</div>
      <div id="palette"></div>
    </div>
    <canvas id="board"></canvas>
    <script>
      const boardId = {json.dumps(board_id)};
      const PALETTE = {json.dumps(list(PALETTE))};
      let cols = {cols};
      let rows = {rows};
      const statusEl = document.getElementById("status");
      const canvas = document.getElementById("board");
      const ctx = canvas.getContext("2d");
      const grid = new Map(); // "x,y" -> [r,g,b]
      let current = PALETTE[7];
      let cell = 10, ox = 0, oy = 0;

      function hexToRgb(hex) {{
        const h = hex.replace("#", "");
        return [parseInt(h.slice(0, 2), 16), parseInt(h.slice(2, 4), 16), parseInt(h.slice(4, 6), 16)];
      }}

      function metrics() {{
        const w = window.innerWidth;
        const h = window.innerHeight;
        cell = Math.max(4, Math.floor(Math.min(w / cols, h / rows)));
        ox = Math.floor((w - cell * cols) / 2);
        oy = Math.floor((h - cell * rows) / 2);
      }}

      function paint(x, y, rgb) {{
        ctx.fillStyle = `rgb(${{rgb[0]}},${{rgb[1]}},${{rgb[2]}})`;
        ctx.fillRect(ox + x * cell + 1, oy + y * cell + 1, cell - 2, cell - 2);
      }}

      function redraw() {{
        const dpr = window.devicePixelRatio || 1;
        const w = window.innerWidth;
        const h = window.innerHeight;
        canvas.width = Math.floor(w * dpr);
        canvas.height = Math.floor(h * dpr);
        canvas.style.width = w + "px";
        canvas.style.height = h + "px";
        ctx.setTransform(dpr, 0, 0, dpr, 0, 0);
        metrics();
        ctx.fillStyle = "#f0f0f0";
        ctx.fillRect(0, 0, w, h);
        ctx.strokeStyle = "#dcdcdc";
        ctx.beginPath();
        for (let x = 0; x <= cols; x++) {{ ctx.moveTo(ox + x * cell, oy); ctx.lineTo(ox + x * cell, oy + rows * cell); }}
        for (let y = 0; y <= rows; y++) {{ ctx.moveTo(ox, oy + y * cell); ctx.lineTo(ox + cols * cell, oy + y * cell); }}
        ctx.stroke();
        for (const [key, rgb] of grid.entries()) {{
          const [x, y] = key.split(",").map(Number);
          paint(x, y, rgb);
        }}
      }}
      window.addEventListener("resize", redraw);

      function apply(msg) {{
        if (msg.gx < 0 || msg.gx >= cols || msg.gy < 0 || msg.gy >= rows) return;
        const rgb = [msg.r, msg.g, msg.b];
        grid.set(`${{msg.gx}},${{msg.gy}}`, rgb);
        paint(msg.gx, msg.gy, rgb);
      }}

      const paletteEl = document.getElementById("palette");
      for (const hex of PALETTE) {{
        const btn = document.createElement("button");
        btn.style.background = hex;
        btn.addEventListener("click", (e) => {{ e.stopPropagation(); current = hex; }});
        paletteEl.appendChild(btn);
      }}

      function wsUrl() {{
        const proto = (location.protocol === "https:") ? "wss" : "ws";
        return `${{proto}}://${{location.host}}/ws/${{boardId}}`;
      }}

      let ws;
      function connect() {{
        statusEl.textContent = `connecting… ${{wsUrl()}}`;
        ws = new WebSocket(wsUrl());
        ws.onopen = () => {{ statusEl.textContent = "connected"; }};
        ws.onclose = () => {{ statusEl.textContent = "disconnected; retrying…"; setTimeout(connect, 500); }};
        ws.onmessage = (ev) => {{
          let msg;
          try {{ msg = JSON.parse(ev.data); }} catch {{ return; }}
          if (msg.t === "hello") {{
            if (msg.cols !== cols || msg.rows !== rows) {{
              cols = msg.cols; rows = msg.rows; grid.clear(); redraw();
            }}
          }} else if (msg.t === "place") {{
            apply(msg);
          }}
        }};
      }}

      canvas.addEventListener("mousedown", (e) => {{
        const gx = Math.floor((e.clientX - ox) / cell);
        const gy = Math.floor((e.clientY - oy) / cell);
        if (gx < 0 || gx >= cols || gy < 0 || gy >= rows) return;
        const [r, g, b] = hexToRgb(current);
        const msg = {{ t: "place", gx, gy, r, g, b }};
        apply(msg);
        if (ws && ws.readyState === 1) ws.send(JSON.stringify(msg));
      }});

      redraw();
      connect();
    </script>
  </body>
</html>
"""
