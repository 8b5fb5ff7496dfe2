from __future__ import annotations

import base64
import binascii
import csv
import io

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local, parse_iso_datetime
from ..common.validators import require_latitude, require_longitude
from ..common.web import handle_errors, json_body, login_required
from ..container import Container
from ..core.enums import LocationErrorKind
from ..core.exceptions import ValidationError
from ..geo.model import Coordinate
from ..ledger.report import REPORT_FIELDS
from ..location.model import LocationFix


def register(app: Flask, container: Container) -> None:
    def _handle():
        return container.session_registry.get(int(session["employee_id"]))

    def _snapshot(handle):
        return jsonify({"success": True, "session": handle.controller.snapshot()})

    @app.route("/session", methods=["GET"], endpoint="session_state")
    @login_required
    @handle_errors
    def session_state():
        return _snapshot(_handle())

    @app.route("/session/zones", methods=["GET"], endpoint="session_zones")
    @login_required
    @handle_errors
    def session_zones():
        zones = [
            {
                "id": z.zone_id,
                "name": z.name,
                "center": {"lat": z.center.latitude, "lng": z.center.longitude},
                "radius": z.radius_meters,
            }
            for z in container.session_registry.zones.all_zones()
        ]
        return jsonify({"success": True, "zones": zones})

    @app.route("/session/location", methods=["POST"], endpoint="session_location")
    @login_required
    @handle_errors
    def session_location():
        data = json_body()
        handle = _handle()

        error = data.get("error")
        if error:
            try:
                kind = LocationErrorKind(str(error).upper())
            except ValueError:
                raise ValidationError(f"Unknown location error {error!r}")
            handle.provider.report_error(kind)
        else:
            coordinate = Coordinate(
                latitude=require_latitude(data.get("lat")),
                longitude=require_longitude(data.get("lng")),
            )
            observed_s = data.get("observedAt")
            observed_at = parse_iso_datetime(observed_s) if observed_s else now_local()
            handle.provider.report_fix(LocationFix(coordinate=coordinate, observed_at=observed_at))

        handle.controller.update_location()
        return _snapshot(handle)

    @app.route("/session/zone", methods=["POST"], endpoint="session_zone")
    @login_required
    @handle_errors
    def session_zone():
        zone_id = json_body().get("zoneId")
        if zone_id in (None, ""):
            raise ValidationError("zoneId is required")
        handle = _handle()
        handle.controller.select_zone(str(zone_id))
        return _snapshot(handle)

    @app.route("/session/checkin", methods=["POST"], endpoint="session_checkin")
    @login_required
    @handle_errors
    def session_checkin():
        handle = _handle()
        handle.controller.request_check_in()
        return _snapshot(handle)

    @app.route("/session/verify", methods=["POST"], endpoint="session_verify")
    @login_required
    @handle_errors
    def session_verify():
        handle = _handle()
        handle.controller.submit_image(_read_image())
        return _snapshot(handle)

    @app.route("/session/cancel", methods=["POST"], endpoint="session_cancel")
    @login_required
    @handle_errors
    def session_cancel():
        handle = _handle()
        handle.controller.cancel_verification()
        return _snapshot(handle)

    @app.route("/session/checkout", methods=["POST"], endpoint="session_checkout")
    @login_required
    @handle_errors
    def session_checkout():
        handle = _handle()
        handle.controller.request_check_out()
        return _snapshot(handle)

    @app.route("/session/report", methods=["GET"], endpoint="session_report")
    @login_required
    @handle_errors
    def session_report():
        controller = _handle().controller
        data = container.report_service.build(controller.ledger, early_checkouts=controller.state.early_checkouts)
        return jsonify({"success": True, "rows": data.rows, "summary": data.summary})

    @app.route("/session/report.csv", methods=["GET"], endpoint="session_report_csv")
    @login_required
    @handle_errors
    def session_report_csv():
        controller = _handle().controller
        data = container.report_service.build(controller.ledger, early_checkouts=controller.state.early_checkouts)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        filename = f"attendance_{now_local().strftime('%Y%m%d')}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )


def _read_image() -> bytes:
    """Image from a multipart ``image`` field or a JSON ``image`` data URL / base64 string."""

    if "image" in request.files:
        return request.files["image"].read()

    encoded = json_body().get("image")
    if not encoded:
        raise ValidationError("An image is required")
    if "," in encoded and encoded.startswith("data:"):
        encoded = encoded.split(",", 1)[1]
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Image is not valid base64")
