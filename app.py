import math
import os
import time
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, request, render_template_string

from ordered_tree.indexing import EmptyTreeError, KeyNotFoundError, OrderedTree

app = Flask(__name__)

tree = OrderedTree()

STATE: Dict[str, Any] = {"key_type": None, "seeded": 0}

KEY_TYPES = {"int": int, "float": float, "str": str}

TREE_KEY_TYPE = os.environ.get("TREE_KEY_TYPE", "int")
TREE_SEED = os.environ.get("TREE_SEED", "")


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

def pair_json(pair) -> Dict[str, Any]:
    key, value = pair
    return {"key": key, "value": value}

def parse_key(raw: Any) -> Optional[Any]:
    """Convert a key from a URL or JSON body to the configured key type.

    Strings must parse exactly; other values must already have the key type.
    Bools are never numbers, and NaN/inf are rejected because they cannot be
    ordered against stored keys.
    """
    convert = KEY_TYPES.get(STATE["key_type"] or TREE_KEY_TYPE)
    if convert is None or raw is None or isinstance(raw, bool):
        return None
    if convert is str:
        return raw if isinstance(raw, str) else None

    if isinstance(raw, str):
        try:
            key = convert(raw.strip())
        except ValueError:
            return None
    elif convert is int:
        key = raw if isinstance(raw, int) else None
    else:
        key = float(raw) if isinstance(raw, (int, float)) else None

    if isinstance(key, float) and not math.isfinite(key):
        return None
    return key

def warm_start(seed: Optional[str] = None, key_type: Optional[str] = None) -> None:
    """Reset the tree and insert the configured seed pairs."""
    key_type = (key_type or TREE_KEY_TYPE).strip()
    if key_type not in KEY_TYPES:
        print(f"[warm_start] Unknown TREE_KEY_TYPE {key_type!r}; using 'int'")
        key_type = "int"
    STATE["key_type"] = key_type
    STATE["seeded"] = 0
    tree.clear()

    seed = (TREE_SEED if seed is None else seed).strip()
    if not seed:
        print("[warm_start] No seed pairs provided.")
        return

    t0 = time.time()
    for item in seed.split(","):
        raw_key, _, value = item.partition("=")
        key = parse_key(raw_key.strip())
        if key is None:
            print(f"[warm_start] Skipping bad seed entry: {item!r}")
            continue
        if tree.insert(key, value.strip()):
            STATE["seeded"] += 1
    t1 = time.time()
    print(f"[warm_start] Seeded {STATE['seeded']:,} pairs in {t1 - t0:.4f}s (height {tree.height()})")


@app.errorhandler(EmptyTreeError)
def handle_empty(e):
    return err(str(e), 404)

@app.errorhandler(KeyNotFoundError)
def handle_missing(e):
    return err(f"key not found: {e.args[0]!r}", 404)


@app.get("/api/status")
def api_status():
    return ok({
        "key_type": STATE["key_type"] or TREE_KEY_TYPE,
        "seeded": STATE["seeded"],
        "size": len(tree),
        "empty": tree.is_empty(),
        "height": tree.height(),
    })

@app.get("/api/tree/find/<key>")
def api_find(key: str):
    k = parse_key(key)
    if k is None:
        return err(f"key must be of type {STATE['key_type'] or TREE_KEY_TYPE}")
    return ok({"key": k, "value": tree.find(k)})

@app.get("/api/tree/root")
def api_root():
    return ok(pair_json(tree.root()))

@app.get("/api/tree/min")
def api_min():
    return ok(pair_json(tree.min()))

@app.get("/api/tree/max")
def api_max():
    return ok(pair_json(tree.max()))

@app.get("/api/tree/inorder")
def api_inorder():
    rows = [pair_json(pair) for pair in tree.inorder()]
    return ok({"count_returned": len(rows), "rows": rows})

@app.get("/api/tree/levels")
def api_levels():
    return ok({"levels": list(tree.levels())})

@app.get("/api/tree/levels.txt")
def api_levels_text():
    lines = [" ".join(str(v) for v in level) for level in tree.levels()]
    body = "\n".join(lines) + ("\n" if lines else "")
    return Response(body, mimetype="text/plain")


@app.post("/api/tree/insert")
def api_insert():
    data = request.get_json(silent=True) or {}
    missing = [k for k in ("key", "value") if k not in data]
    if missing:
        return err(f"missing fields: {missing}")

    key = parse_key(data["key"])
    if key is None:
        return err(f"key must be of type {STATE['key_type'] or TREE_KEY_TYPE}")

    if not tree.insert(key, data["value"]):
        return err("insert rejected (key already exists)", 409, value=tree.find(key))
    return ok({"inserted": True, "key": key, "size": len(tree)})

@app.post("/api/tree/erase/<key>")
def api_erase(key: str):
    k = parse_key(key)
    if k is None:
        return err(f"key must be of type {STATE['key_type'] or TREE_KEY_TYPE}")
    if not tree.erase(k):
        return err("key not found", 404)
    return ok({"erased": True, "key": k, "size": len(tree)})

@app.post("/api/tree/clear")
def api_clear():
    tree.clear()
    return ok({"cleared": True, "size": 0})


HTML = r"""
<!doctype html>
<html>
<head><meta charset="utf-8"><title>OrderedTree inspector</title></head>
<body>
  <h1>OrderedTree inspector</h1>
  <p>{{ size }} pairs, height {{ height }}</p>
  {% if levels %}
  <pre>{% for level in levels %}{{ level|join(' ') }}
{% endfor %}</pre>
  {% else %}
  <p>The tree is empty.</p>
  {% endif %}
</body>
</html>
"""

@app.get("/")
def home():
    return render_template_string(HTML, size=len(tree), height=tree.height(), levels=list(tree.levels()))

if __name__ == "__main__":
    warm_start()
    app.run(host="127.0.0.1", port=int(os.environ.get("PORT", "5000")), debug=False)
