"""
Teacher Component
"""
from .. import register_component
from .routes import teacher_bp
from .service import TeacherService


@register_component('teacher')
def init_teacher(app):
    """Initialize Teacher component with Flask app"""
    app.register_blueprint(teacher_bp)
    return TeacherService()


__all__ = ['teacher_bp', 'TeacherService', 'init_teacher']
