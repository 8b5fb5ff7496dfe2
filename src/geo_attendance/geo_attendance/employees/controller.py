from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.web import admin_required, handle_errors, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/employees/register", methods=["POST"], endpoint="register_employee")
    @handle_errors
    def register_employee():
        data = json_body()
        employee = container.employee_service.register(
            first_name=data.get("firstName", ""),
            last_name=data.get("lastName", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            company_name=data.get("companyName", ""),
            branch_name=data.get("branchName", ""),
            profile_pic=data.get("profilePic", ""),
        )
        return jsonify({"success": True, "message": "User registered successfully", "user": employee}), 201

    @app.route("/employees/lookup", methods=["POST"], endpoint="lookup_employees")
    @handle_errors
    def lookup_employees():
        data = json_body()
        employees = container.employee_service.lookup_by_branch(
            company_name=data.get("companyName", ""),
            branch_name=data.get("branchName", ""),
        )
        return jsonify({"success": True, "employees": employees, "employeeCount": len(employees)})

    @app.route("/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    @handle_errors
    def list_employees():
        return jsonify({"success": True, "users": container.employee_service.list_all()})

    @app.route("/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    @handle_errors
    def get_employee(employee_id: int):
        return jsonify({"success": True, "user": container.employee_service.get(employee_id)})

    @app.route("/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    @handle_errors
    def delete_employee(employee_id: int):
        container.employee_service.delete(employee_id)
        container.session_registry.close(employee_id)
        return jsonify({"success": True, "message": "User deleted successfully"})

    @app.route("/login", methods=["POST"], endpoint="login")
    @handle_errors
    def login():
        data = json_body()
        s_employee = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.permanent = bool(data.get("rememberMe"))
        app.permanent_session_lifetime = timedelta(days=7)

        session["employee_id"] = s_employee.employee_id
        session["name"] = s_employee.full_name
        session["role"] = s_employee.role.value
        session["company_name"] = s_employee.company_name
        session["branch_name"] = s_employee.branch_name

        return jsonify(
            {
                "success": True,
                "message": "Login successful",
                "user": {
                    "id": s_employee.employee_id,
                    "name": s_employee.full_name,
                    "email": s_employee.email,
                    "companyName": s_employee.company_name,
                    "branchName": s_employee.branch_name,
                    "role": s_employee.role.value,
                },
            }
        )

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        employee_id = session.get("employee_id")
        if employee_id is not None:
            container.session_registry.close(int(employee_id))
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})
