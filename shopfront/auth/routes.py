from flask_jwt_extended import create_access_token, jwt_required
from ..model import User
from ..utils.api import ok, err, json_body
from ..utils.decorators import _current_user
from . import bp

@bp.post("/login")
def login():
    data = json_body()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    if not email or not password:
        return err("Email and password are required", 400)
    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        return err("Invalid email or password", 401)

    access_token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
    return ok(token=access_token, user=user.as_dict())

@bp.get("/me")
@jwt_required()
def me():
    user = _current_user()
    if not user:
        return err("user not found", 404)
    return ok(user=user.as_dict())
