from flask import jsonify, request

def api_ok(data=None, **fields):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    body.update(fields)
    return body

def api_error(error, **fields):
    return {"success": False, "error": error, **fields}

# unified response helpers
def ok(data=None, status_code=200, **fields):
    resp = jsonify(api_ok(data, **fields))
    resp.status_code = status_code
    return resp

def err(error, status_code=400, **fields):
    resp = jsonify(api_error(error, **fields))
    resp.status_code = status_code
    return resp

def json_body() -> dict:
    """Request JSON if it is an object; anything else reads as an empty body."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
