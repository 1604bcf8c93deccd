from .CourseModel import Subject, SUBJECTS, CourseEntry, SubjectEntry, Courses, Subjects
from .StudentModel import StudentCreate, StudentUpdate, Student, StudentLogin
from .TeacherModel import TeacherCreate, TeacherUpdate, Teacher, TeacherLogin

__all__ = ['Subject','SUBJECTS','CourseEntry','SubjectEntry','Courses','Subjects','StudentCreate','StudentUpdate','Student','StudentLogin','TeacherCreate','TeacherUpdate','Teacher','TeacherLogin']
