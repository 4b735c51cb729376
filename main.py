from __future__ import annotations
import argparse
import json
import sys
import time
from typing import Optional, Dict, Any

import requests

from config import CHART_HEIGHT_PX, DEFAULT_BASE_URL
from coords import price_to_pixel
from messages import GAME_TITLE

# -----------------------------
# Simple HTTP client helpers
# -----------------------------
def _post(base_url: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    url = f"{base_url.rstrip('/')}{path}"
    r = requests.post(url, json=payload, timeout=60)
    if r.status_code >= 400:
        print(f"\n[CLIENT] HTTP {r.status_code} from {url}")
        try:
            print("[CLIENT] Body:", r.json())
        except ValueError:
            print("[CLIENT] Body:", r.text[:1000])
        r.raise_for_status()
    return r.json()

def _get(base_url: str, path: str) -> Dict[str, Any]:
    url = f"{base_url.rstrip('/')}{path}"
    r = requests.get(url, timeout=60)
    r.raise_for_status()
    return r.json()

# -----------------------------
# API wrappers
# -----------------------------
def start_session(
    base_url: str,
    seed: Optional[int] = None,
    panel_count: Optional[int] = None,
    bars_per_panel: Optional[int] = None,
) -> Dict[str, Any]:
    payload = {"seed": seed, "panel_count": panel_count, "bars_per_panel": bars_per_panel}
    return _post(base_url, "/v1/sr/sessions", payload)

def select_line(base_url: str, session_id: str, kind: str) -> Dict[str, Any]:
    return _post(base_url, f"/v1/sr/sessions/{session_id}/select", {"kind": kind})

def place(base_url: str, session_id: str, pixel_y: float, area_top: float, area_height: float) -> Dict[str, Any]:
    payload = {"pixel_y": pixel_y, "area_top": area_top, "area_height": area_height}
    return _post(base_url, f"/v1/sr/sessions/{session_id}/place", payload)

def advance(base_url: str, session_id: str) -> Dict[str, Any]:
    return _post(base_url, f"/v1/sr/sessions/{session_id}/advance")

def reset(base_url: str, session_id: str, regenerate: bool = False) -> Dict[str, Any]:
    return _post(base_url, f"/v1/sr/sessions/{session_id}/reset", {"regenerate": regenerate})

def get_summary(base_url: str, session_id: str) -> Dict[str, Any]:
    return _get(base_url, f"/v1/sr/sessions/{session_id}/summary")

# -----------------------------
# Pretty printers
# -----------------------------
def _pixel(view: Dict[str, Any], price: float, height: float) -> float:
    return price_to_pixel(price, 0.0, height, view["visible_low"], view["visible_high"])

def print_view(view: Dict[str, Any], height: float) -> None:
    print(f"\n===== {view['label']} =====")
    print(f"Visible range:   {view['visible_low']:.2f} .. {view['visible_high']:.2f}  (0px .. {height:.0f}px)")
    bars = view["active_panel"]
    closes = " ".join(f"{b['close']:.1f}" for b in bars)
    print(f"Closes ({len(bars)}):    {closes}")
    print(f"Selected line:   {view.get('selected_line') or '(none)'}")
    for kind in ("support", "resistance"):
        levels = ", ".join(
            f"{p:.2f} @ {_pixel(view, p, height):.0f}px" for p in view["placements"][kind]
        )
        print(f"{kind.capitalize():<11}      {levels or '-'}")
    if view.get("feedback_text"):
        print(f"\nFeedback: {view['feedback_text']}")
    print("=" * 32)

def print_summary(summary: Dict[str, Any]) -> None:
    print("\n===== SUMMARY =====")
    print(summary["text"])
    print("=" * 19)

# -----------------------------
# Interactive play loop
# -----------------------------
HELP = (
    "Commands: s = select support, r = select resistance, c <pixel_y> = click,\n"
    "          n = next chart, x = reset, j = dump JSON state, q = quit"
)

def interactive_play(base_url: str, seed: Optional[int], panels: Optional[int], bars: Optional[int], height: float) -> None:
    view = start_session(base_url, seed=seed, panel_count=panels, bars_per_panel=bars)
    sid = view["session_id"]
    print(f"\n✅ {GAME_TITLE}: session {sid}")
    print(HELP)
    print_view(view, height)

    while True:
        raw = input("> ").strip()
        if not raw:
            continue
        cmd, _, arg = raw.partition(" ")
        cmd = cmd.lower()

        if cmd == "q":
            return
        if cmd == "s":
            view = select_line(base_url, sid, "support")
        elif cmd == "r":
            view = select_line(base_url, sid, "resistance")
        elif cmd == "c":
            try:
                y = float(arg)
            except ValueError:
                print("Usage: c <pixel_y>")
                continue
            view = place(base_url, sid, y, 0.0, height)
        elif cmd == "n":
            if not view["can_advance"]:
                print("Place two support and two resistance lines first.")
                continue
            view = advance(base_url, sid)
        elif cmd == "x":
            view = reset(base_url, sid)
        elif cmd == "j":
            print(json.dumps(view, indent=2))
            continue
        else:
            print(HELP)
            continue

        if view["phase"] == "finished":
            print_summary(get_summary(base_url, sid))
            print("Play again with 'x', or 'q' to quit.")
        else:
            print_view(view, height)

# -----------------------------
# Auto-demo play loop
# -----------------------------
def auto_demo_play(base_url: str, seed: Optional[int], panels: Optional[int], bars: Optional[int], height: float) -> None:
    """
    Clicks at each chart's true levels (plus one deliberate miss per line) and
    advances to the end.
    """
    print("\n🤖 Running auto-demo...")
    view = start_session(base_url, seed=seed, panel_count=panels, bars_per_panel=bars)
    sid = view["session_id"]
    print(f"✅ Session started: {sid}")

    while view["phase"] == "playing":
        truth = view["ground_truth"]
        for kind in ("support", "resistance"):
            select_line(base_url, sid, kind)
            miss = height / 2.0
            place(base_url, sid, miss, 0.0, height)
            view = place(base_url, sid, _pixel(view, truth[kind], height), 0.0, height)
        print_view(view, height)
        view = advance(base_url, sid)
        time.sleep(0.1)

    print_summary(get_summary(base_url, sid))

# -----------------------------
# Run server (programmatically)
# -----------------------------
def run_server(port: int, host: str = "127.0.0.1", reload: bool = True) -> None:
    import uvicorn
    uvicorn.run("api:app", host=host, port=port, reload=reload)

# -----------------------------
# Health checker
# -----------------------------
def health_check(base_url: str) -> None:
    print(f"🔎 Checking server at {base_url} ...")
    try:
        r = requests.get(f"{base_url.rstrip('/')}/docs", timeout=10)
        r.raise_for_status()
        print("✅ /docs reachable")

        view = start_session(base_url)
        print(f"✅ JSON API ok (session_id={view['session_id']})")
    except requests.RequestException as e:
        print(f"❌ Health check failed: {e}")
        sys.exit(1)

# -----------------------------
# CLI
# -----------------------------
def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=f"{GAME_TITLE}: server + terminal client")

    sub = p.add_subparsers(dest="cmd", required=True)

    ps = sub.add_parser("serve", help="Start the FastAPI server (uvicorn)")
    ps.add_argument("--port", type=int, default=8000, help="Port to bind")
    ps.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind")
    ps.add_argument("--no-reload", action="store_true", help="Disable auto-reload")

    pp = sub.add_parser("play", help="Play a session (interactive or auto)")
    pp.add_argument("--base-url", type=str, default=DEFAULT_BASE_URL, help="API base URL")
    pp.add_argument("--seed", type=int, default=None, help="Seed for reproducible charts")
    pp.add_argument("--panels", type=int, default=None, help="Number of charts")
    pp.add_argument("--bars", type=int, default=None, help="Bars per chart")
    pp.add_argument("--height", type=float, default=CHART_HEIGHT_PX, help="Chart height in pixels")
    pp.add_argument("--auto-demo", action="store_true", help="Run a canned demo instead of prompting")

    ph = sub.add_parser("health", help="Check server availability")
    ph.add_argument("--base-url", type=str, default=DEFAULT_BASE_URL, help="API base URL")

    return p.parse_args(argv)

def main() -> None:
    args = parse_args()

    if args.cmd == "serve":
        run_server(port=args.port, host=args.host, reload=(not args.no_reload))
        return

    if args.cmd == "play":
        try:
            requests.get(f"{args.base_url.rstrip('/')}/docs", timeout=5).raise_for_status()
        except requests.RequestException:
            print("⚠️  Could not reach the server. Is it running?\n"
                  "    Start it in another terminal:\n"
                  "    python main.py serve")
            sys.exit(1)

        play = auto_demo_play if args.auto_demo else interactive_play
        play(args.base_url, args.seed, args.panels, args.bars, args.height)
        return

    if args.cmd == "health":
        health_check(args.base_url)
        return

    print("Unknown command. Try: python main.py --help")
    sys.exit(2)

if __name__ == "__main__":
    main()
