import os
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request, render_template_string

from linkedbst.tree import SearchTree

app = Flask(__name__)

tree = SearchTree()

KEY_TYPES = ("int", "str")


def resolve_key_type(raw: Optional[str]) -> str:
    """Return "int" or "str"; anything else falls back to "int" with a warning."""
    kind = (raw or "int").strip().lower()
    if kind not in KEY_TYPES:
        print(f"[warm_start] Unknown BST_KEY_TYPE {raw!r}; falling back to 'int'")
        return "int"
    return kind


KEY_TYPE = resolve_key_type(os.environ.get("BST_KEY_TYPE", "int"))
DEFAULT_SEED_KEYS = os.environ.get("BST_SEED_KEYS", "")
HOST = os.environ.get("BST_HOST", "127.0.0.1")
PORT = int(os.environ.get("BST_PORT", "5000"))

STATE: Dict[str, Any] = {"seed_keys": [], "rejected_seeds": 0}


def ok(data=None, **extra):
    payload = {"ok": True}
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return jsonify(payload)

def err(message: str, status: int = 400, **extra):
    payload = {"ok": False, "error": message}
    payload.update(extra)
    return jsonify(payload), status

def parse_key(raw: Any, key_type: Optional[str] = None) -> Optional[Any]:
    """
    Convert a raw route/body key into a tree key.

    With key type "int" only plain whole numbers are accepted (digits with
    an optional leading "-"); with "str" any non-blank string is. Returns
    None if the key is not usable.
    """
    kind = key_type or KEY_TYPE
    if raw is None or isinstance(raw, bool):
        return None
    if kind == "int":
        if isinstance(raw, int):
            return raw
        s = str(raw).strip()
        digits = s[1:] if s.startswith("-") else s
        if not (digits.isascii() and digits.isdigit()):
            return None
        return int(s)
    s = str(raw).strip()
    return s or None

def warm_start(seed_keys: Optional[str] = None) -> None:
    """Reset the tree and insert the seed keys (value = key)."""
    global tree
    tree = SearchTree()

    raw = DEFAULT_SEED_KEYS if seed_keys is None else seed_keys
    parts = [p for p in (raw or "").split(",") if p.strip()]
    STATE["seed_keys"] = []
    STATE["rejected_seeds"] = 0

    if not parts:
        print("[warm_start] No seed keys provided.")
        return

    for part in parts:
        key = parse_key(part)
        if key is None:
            print(f"[warm_start] Skipping invalid seed key: {part!r}")
            STATE["rejected_seeds"] += 1
            continue
        if tree.insert(key, key):
            STATE["seed_keys"].append(key)
        else:
            STATE["rejected_seeds"] += 1
    print(f"[warm_start] Seeded {len(tree)} keys ({STATE['rejected_seeds']} rejected)")

def describe(p) -> Dict[str, Any]:
    parent = tree.parent(p)
    return {
        "key": p.get_key(),
        "value": p.get_value(),
        "parent": None if parent is None else parent.get_key(),
        "depth": tree.depth(p),
        "children": tree.num_children(p),
        "path": list(tree.path_to(p.get_key())),
    }


@app.get("/api/status")
def api_status():
    return ok({
        "key_type": KEY_TYPE,
        "seed_keys": STATE["seed_keys"],
        "rejected_seeds": STATE["rejected_seeds"],
        "size": len(tree),
        "empty": tree.is_empty(),
    })


@app.post("/api/tree/insert")
def api_tree_insert():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return err("body must be a JSON object")
    if "key" not in data:
        return err("missing fields: ['key']")

    key = parse_key(data.get("key"))
    if key is None:
        return err(f"key must be a valid {KEY_TYPE}")

    value = data.get("value", key)
    if not tree.insert(key, value):
        return err("insert rejected (key already exists)", 409, key=key)

    print(f"[insert] key={key!r} size={len(tree)}")
    return ok(describe(tree.find(key)))

@app.get("/api/tree/find/<key>")
def api_tree_find(key: str):
    k = parse_key(key)
    if k is None:
        return err(f"key must be a valid {KEY_TYPE}")

    p = tree.find(k)
    if p is None:
        return err("key not found", 404)
    return ok(describe(p))

@app.post("/api/tree/detach/<key>")
def api_tree_detach(key: str):
    k = parse_key(key)
    if k is None:
        return err(f"key must be a valid {KEY_TYPE}")

    subtree = tree.detach(k)
    if subtree is None:
        return err("key not found", 404)

    print(f"[detach] key={k!r} removed={len(subtree)} remaining={len(tree)}")
    return ok({
        "detached": subtree.to_dict(),
        "detached_size": len(subtree),
        "remaining_size": len(tree),
    })

@app.get("/api/tree/dump")
def api_tree_dump():
    return ok({"size": len(tree), "root": tree.to_dict()})


HTML = r"""
<!doctype html>
<html>
<head>
<meta charset="utf-8">
<title>linkedbst</title>
<style>
  body { font-family: system-ui, sans-serif; margin: 24px; }
  input { padding: 4px 8px; }
  pre { background: #f4f4f4; padding: 12px; border-radius: 6px; }
</style>
</head>
<body>
<h2>Binary search tree</h2>
<div>
  <input id="key" placeholder="key">
  <input id="value" placeholder="value (optional)">
  <button onclick="run_insert()">Insert</button>
  <button onclick="run_find()">Find</button>
  <button onclick="run_detach()">Detach</button>
  <button onclick="run_dump()">Dump</button>
</div>
<pre id="out"></pre>
<script>
  const el = (id) => document.getElementById(id);
  const show = (r) => { el("out").textContent = JSON.stringify(r, null, 2); };
  const key = () => encodeURIComponent((el("key").value || "").trim());

  async function run_insert(){
    const body = {key: (el("key").value || "").trim()};
    const v = (el("value").value || "").trim();
    if(v !== "") body.value = v;
    const r = await fetch("/api/tree/insert", {
      method: "POST", headers: {"Content-Type": "application/json"}, body: JSON.stringify(body)
    });
    show(await r.json());
  }
  async function run_find(){ show(await (await fetch(`/api/tree/find/${key()}`)).json()); }
  async function run_detach(){ show(await (await fetch(`/api/tree/detach/${key()}`, {method: "POST"})).json()); }
  async function run_dump(){ show(await (await fetch("/api/tree/dump")).json()); }

  run_dump();
</script>
</body>
</html>
"""

@app.get("/")
def home():
    return render_template_string(HTML)

if __name__ == "__main__":
    warm_start()
    app.run(host=HOST, port=PORT, debug=True, use_reloader=False, threaded=False)
