from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, handle_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/offices", methods=["POST"], endpoint="create_office")
    @admin_required
    @handle_errors
    def create_office():
        data = json_body()
        coords = data.get("coordinates") or data.get("officeCoordinates") or {}
        office = container.office_service.create_office(
            branch_name=data.get("branchName", ""),
            company_name=data.get("companyName", ""),
            latitude=coords.get("lat"),
            longitude=coords.get("lng"),
            radius=data.get("radius"),
        )
        return jsonify({"success": True, "message": "Office created successfully", "office": office}), 201

    @app.route("/offices", methods=["GET"], endpoint="list_offices")
    @handle_errors
    def list_offices():
        return jsonify({"success": True, "offices": container.office_service.list_offices()})

    @app.route("/offices/<company_name>", methods=["GET"], endpoint="offices_by_company")
    @handle_errors
    def offices_by_company(company_name: str):
        return jsonify({"success": True, "offices": container.office_service.list_by_company(company_name)})

    @app.route("/offices/<int:office_id>", methods=["DELETE"], endpoint="delete_office")
    @admin_required
    @handle_errors
    def delete_office(office_id: int):
        container.office_service.delete_office(office_id)
        return jsonify({"success": True, "message": "Office deleted successfully"})
