import csv
import sys
from sqlalchemy.orm import Session
from database.db import SessionLocal
from models.students import Student as StudentModel  # ✅ model import

CSV_PATH = "data/students.csv"  # ✅ default file path
# columns: fname, mname, lname, gender, age, user_id


def _opt_int(value):
    return int(value) if value not in (None, "") else None


def migrate_students(db: Session, csv_path: str = CSV_PATH) -> int:
    count = 0
    with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for row in reader:
            student = StudentModel(
                fname=row["fname"].strip(),                 # first name
                mname=(row.get("mname") or "").strip() or None,
                lname=row["lname"].strip(),                 # last name
                gender=row.get("gender") or None,           # Male / Female
                age=_opt_int(row.get("age")),               # age
                user_id=_opt_int(row.get("user_id")),       # linked login
            )
            db.add(student)
            count += 1

    db.commit()
    return count

if __name__ == "__main__":
    db = SessionLocal()
    try:
        n = migrate_students(db, sys.argv[1] if len(sys.argv) > 1 else CSV_PATH)
    finally:
        db.close()
    print(f"✅ students CSV -> DB: {n} rows")
