"""Example: use the attendance ledger directly (no Flask, no database).

Controllers are a thin layer; the check-in rules live in pure functions.
"""

from datetime import date, datetime, time

from src.classroom_attendance.classroom_attendance.attendance import ledger
from src.classroom_attendance.classroom_attendance.attendance.csv_export import export_csv
from src.classroom_attendance.classroom_attendance.attendance.model import AttendanceRecord, ClassSession


def main():
    session = ClassSession(
        start_time=time(9, 0),
        late_threshold_minutes=10,
        absent_threshold_minutes=30,
        session_dates=(date(2024, 9, 3), date(2024, 9, 5)),
    )
    records = [AttendanceRecord.empty("Ada", 2), AttendanceRecord.empty("Grace", 1)]

    code = ledger.classify(time(9, 0), 10, 30, datetime(2024, 9, 3, 9, 20))
    records[0] = ledger.record_checkin(session, records[0], date(2024, 9, 3), code)
    records = ledger.sweep_absences(session, records, date(2024, 9, 3))

    print(export_csv(session.session_dates, records))


if __name__ == "__main__":
    main()
