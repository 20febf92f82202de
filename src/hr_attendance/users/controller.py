from __future__ import annotations

from flask import Flask, request, session

from ..common.web import current_user, json_field, json_response, login_required
from ..container import Container


def _body() -> dict:
    return request.get_json(silent=True) or request.form.to_dict()


def register(app: Flask, container: Container) -> None:
    @app.route("/api/user/signup", methods=["POST"], endpoint="signup")
    def signup():
        body = _body()
        user_id = container.auth_service.signup(
            full_name=body.get("fullname", ""),
            emp_id=body.get("empId", ""),
            role=body.get("role", "user"),
            position=body.get("position", ""),
            email=body.get("email", ""),
            password=body.get("password", ""),
        )
        return json_response("Account Created Successfully", data={"id": user_id})

    @app.route("/api/user/login", methods=["POST"], endpoint="login")
    def login():
        body = _body()
        s_user = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        return json_response("Login Successfully", data={"id": s_user.user_id, "isAdmin": s_user.is_admin})

    @app.route("/api/user/logout", methods=["POST"], endpoint="logout")
    @login_required
    def logout():
        session.clear()
        return json_response("Logged out")

    @app.route("/api/user/whoami", methods=["GET"], endpoint="whoami")
    @login_required
    def whoami():
        user = container.user_service.get_user(current_user().user_id)
        return json_response("User information", data=user.to_public_dict())

    @app.route("/api/user/edit", methods=["PUT"], endpoint="edit_profile")
    @login_required
    def edit_profile():
        body = _body()
        user = container.user_service.edit_profile(
            current_user().user_id,
            full_name=body.get("fullname", ""),
            emp_id=body.get("empId", ""),
            position=body.get("position", ""),
        )
        session["name"] = user.full_name
        return json_response("Profile updated successfully", data=user.to_public_dict())

    @app.route("/api/user/change-password/<int:user_id>", methods=["PUT"], endpoint="change_password")
    @login_required
    def change_password(user_id: int):
        container.user_service.change_password(
            acting=current_user(),
            user_id=user_id,
            new_password=_body().get("newPassword", ""),
        )
        return json_response("Password Changed Successfully")

    @app.route("/api/user/face-descriptor", methods=["GET"], endpoint="get_face_descriptor")
    @login_required
    def get_face_descriptor():
        data = container.user_service.get_face_descriptor(current_user().user_id)
        return json_response("Face descriptor", data=data)

    @app.route("/api/user/face-descriptor", methods=["PUT"], endpoint="set_face_descriptor")
    @login_required
    def set_face_descriptor():
        media = request.files.get("media")
        container.user_service.set_face_descriptor(
            current_user().user_id,
            json_field(_body().get("descriptor")),
            image=media.read() if media else None,
        )
        return json_response("Face descriptor saved")
