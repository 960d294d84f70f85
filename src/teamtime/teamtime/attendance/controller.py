from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.web import current_user, json_body, login_required, ok, optional_date, roles_required
from ..container import Container
from ..core.enums import Role
from .service import AttendanceService, PositionFix, PunchResult


def _punch_payload(result: PunchResult) -> dict:
    return {
        "record": AttendanceService.to_ui(result.record),
        "location_status": result.location_status.value,
        "distance_m": result.distance_m,
    }


def register(app: Flask, container: Container) -> None:
    def _names() -> dict[int, str]:
        return {e.employee_id: e.name for e in container.employee_service.list_all()}

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        user = current_user()
        now = now_local()
        record = container.attendance_service.get_today_record(user.employee_id, now.date())
        breaks = container.break_service.today(user.employee_id, now.date())
        return jsonify(
            {
                "state": container.attendance_service.state_for(user.employee_id, now.date()).value,
                "record": AttendanceService.to_ui(record, now=now) if record else None,
                "breaks": [container.break_service.to_ui(b) for b in breaks],
                "geolocation_timeout_seconds": app.config["GEOLOCATION_TIMEOUT_SECONDS"],
            }
        )

    @app.route("/api/attendance/punch-in", methods=["POST"], endpoint="punch_in")
    @login_required
    def punch_in():
        data = json_body()
        result = container.attendance_service.punch_in(
            current_user().employee_id,
            position=PositionFix.from_payload(data.get("position")),
            mood=data.get("mood"),
        )
        return ok(_punch_payload(result), 201)

    @app.route("/api/attendance/punch-out", methods=["POST"], endpoint="punch_out")
    @login_required
    def punch_out():
        data = json_body()
        result = container.attendance_service.punch_out(
            current_user().employee_id,
            position=PositionFix.from_payload(data.get("position")),
            work_log=data.get("work_log"),
        )
        return ok(_punch_payload(result))

    @app.route("/api/attendance/<int:record_id>/work-log", methods=["PUT"], endpoint="update_work_log")
    @login_required
    def update_work_log(record_id: int):
        record = container.attendance_service.update_work_log(
            current_user().employee_id,
            record_id=record_id,
            work_log=json_body().get("work_log", ""),
        )
        return ok({"record": AttendanceService.to_ui(record)})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        user = current_user()
        if request.args.get("range") == "week":
            rows = container.attendance_service.get_weekly_ui(user.employee_id)
        else:
            rows = container.attendance_service.get_history_ui(user.employee_id)
        return jsonify(rows)

    @app.route("/api/team/working-now", methods=["GET"], endpoint="working_now")
    @login_required
    def working_now():
        names = _names()
        records = container.attendance_service.working_now()
        return jsonify(
            [
                {
                    "employee_id": r.employee_id,
                    "name": names.get(r.employee_id, "Unknown"),
                    "punch_in": r.punch_in.strftime("%H:%M"),
                    "mood": r.mood.value,
                }
                for r in records
            ]
        )

    @app.route("/api/team/attendance", methods=["GET"], endpoint="team_attendance")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def team_attendance():
        work_date = optional_date(request.args.get("date")) or now_local().date()
        names = _names()
        rows = []
        for r in container.attendance_service.team_for_date(work_date):
            row = AttendanceService.to_ui(r)
            row["name"] = names.get(r.employee_id, "Unknown")
            rows.append(row)
        return jsonify({"date": work_date.isoformat(), "records": rows})

    @app.route("/api/team/attendance.csv", methods=["GET"], endpoint="team_attendance_csv")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def team_attendance_csv():
        work_date = optional_date(request.args.get("date")) or now_local().date()
        data = container.report_service.build_daily_report(work_date)
        return app.response_class(
            data.to_csv_bytes(),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={data.filename}"},
        )
