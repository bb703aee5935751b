import csv
import sys
from decimal import Decimal
from sqlalchemy.orm import Session
from database.db import SessionLocal
from models.grades import StudentGrade as StudentGradeModel  # ✅ model import

CSV_PATH = "data/grades.csv"  # ✅ default file path
# columns: student_id, class_id, subject_id, quarter, grade, teacher_id


def migrate_grades(db: Session, csv_path: str = CSV_PATH) -> int:
    """Insert or overwrite quarter grades; a bad row aborts the whole file."""
    count = 0
    try:
        with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
            reader = csv.DictReader(csvfile)
            for line_no, row in enumerate(reader, start=2):
                quarter = int(row["quarter"])
                grade = Decimal(row["grade"])
                if quarter not in (1, 2, 3, 4):
                    raise ValueError(f"line {line_no}: quarter must be 1-4, got {quarter}")
                if not Decimal("0") <= grade <= Decimal("100"):
                    raise ValueError(f"line {line_no}: grade must be 0-100, got {grade}")

                db.merge(StudentGradeModel(
                    student_id=int(row["student_id"]),   # student id
                    class_id=int(row["class_id"]),       # class id
                    subject_id=int(row["subject_id"]),   # subject id
                    quarter=quarter,                     # 1..4
                    grade=grade,                         # 0.00 ~ 100.00
                    teacher_id=int(row["teacher_id"]) if row.get("teacher_id") else None,
                ))
                count += 1
        db.commit()
    except Exception:
        db.rollback()
        raise
    return count

if __name__ == "__main__":
    db = SessionLocal()
    try:
        n = migrate_grades(db, sys.argv[1] if len(sys.argv) > 1 else CSV_PATH)
    finally:
        db.close()
    print(f"✅ grades CSV -> DB: {n} rows")
