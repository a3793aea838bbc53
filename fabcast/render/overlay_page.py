"""Broadcast-capture HTML page (OBS browser source, 1920x1080, transparent)."""
import json
from string import Template

from fabcast.config import FADE_OUT_SEC
from fabcast.models.overlay import Slot

OVERLAY_HTML = Template("""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=1920, height=1080">
  <title>FAB Overlay - $label</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    html, body { background: transparent; overflow: hidden; }
    body { width: 1920px; height: 1080px; position: relative; font-family: "Inter", "Segoe UI", sans-serif; }

    .lower-third {
      position: absolute;
      bottom: 56px;
      display: flex;
      align-items: stretch;
      opacity: 0;
      transform: translateY(24px);
      transition: opacity ${fade}s ease-out, transform ${fade}s ease-out;
      pointer-events: none;
    }
    .lower-third.side-left { left: 56px; }
    .lower-third.side-right { right: 56px; flex-direction: row-reverse; }
    .lower-third.visible { opacity: 1; transform: translateY(0); }
    .lower-third.cleared { display: none; }

    .accent { width: 6px; background: #fbbf24; flex-shrink: 0; }
    .panel {
      background: rgba(24, 24, 27, 0.9);
      backdrop-filter: blur(4px);
      border: 1px solid rgba(63, 63, 70, 0.5);
      padding: 16px 28px;
    }
    .side-left .panel { border-left: 0; text-align: left; }
    .side-right .panel { border-right: 0; text-align: right; }
    .name { color: #fff; font-size: 36px; font-weight: 700; letter-spacing: 0.1em; text-transform: uppercase; line-height: 1; }
    .meta { margin-top: 8px; display: flex; gap: 16px; align-items: center; }
    .side-right .meta { justify-content: flex-end; }
    .rating { color: #fbbf24; font-size: 18px; font-weight: 600; }
    .rank, .country { color: #a1a1aa; font-size: 14px; font-weight: 500; text-transform: uppercase; }
    .sep { color: #71717a; font-size: 14px; }
  </style>
</head>
<body>
  <div id="lt" class="lower-third cleared side-$side">
    <div class="accent"></div>
    <div class="panel">
      <div class="name" id="lt-name"></div>
      <div class="meta">
        <span class="rating" id="lt-rating"></span>
        <span class="sep">&middot;</span>
        <span class="rank" id="lt-rank"></span>
        <span class="sep" id="lt-country-sep">&middot;</span>
        <span class="country" id="lt-country"></span>
      </div>
    </div>
  </div>
  <script>
    const SLOT = $slot_js;
    const POLL_MS = $poll_ms;
    let current = { player: null, visible: false };
    let connectionError = null;

    function fmt(n) { return n === null || n === undefined ? "" : Number(n).toLocaleString(); }

    function render(state) {
      const el = document.getElementById("lt");
      const player = state && state.player ? state.player : null;
      const visible = !!(state && state.visible === true && player);
      if (!player && !visible) {
        el.classList.remove("visible");
        el.classList.add("cleared");
        return;
      }
      document.getElementById("lt-name").textContent = player.name || "";
      document.getElementById("lt-rating").textContent = "ELO " + fmt(player.rating);
      document.getElementById("lt-rank").textContent = "RANK #" + fmt(player.rank);
      const country = player.countryCode || "";
      document.getElementById("lt-country").textContent = country;
      document.getElementById("lt-country-sep").style.display = country ? "" : "none";
      if (el.classList.contains("cleared")) {
        el.classList.remove("cleared");
        void el.offsetWidth;  // restart the entry transition
      }
      el.classList.toggle("visible", visible);
    }

    async function poll() {
      try {
        const res = await fetch("/api/overlay-state?slot=" + encodeURIComponent(SLOT));
        const json = await res.json();
        if (json.success) {
          current = json.data;
          connectionError = null;
          render(current);
        } else {
          connectionError = json.error;
        }
      } catch (e) {
        // keep showing the last known-good state
        connectionError = "Cannot reach the server. Check your connection.";
      }
    }

    poll();
    const timer = setInterval(poll, POLL_MS);
    window.addEventListener("pagehide", () => clearInterval(timer), { once: true });
  </script>
</body>
</html>
""")


def render_overlay_page(slot: Slot, poll_interval_sec: float) -> str:
    return OVERLAY_HTML.substitute(
        label=slot.label,
        side=slot.side,
        slot_js=json.dumps(slot.value),
        poll_ms=int(poll_interval_sec * 1000),
        fade=FADE_OUT_SEC,
    )
