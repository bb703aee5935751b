from .users import User
from .school_years import SchoolYear
from .students import Student
from .teachers import Teacher
from .subjects import Subject
from .classes import Class
from .class_subjects import ClassSubject
from .class_students import ClassStudent
from .grades import StudentGrade
