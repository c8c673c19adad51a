# app/core/exceptions.py

class BaseAppException(Exception):
    """Базовый класс для всех кастомных исключений приложения."""
    def __init__(self, message: str = "App exception"):
        super().__init__(message)

# ==== Валидация/создание ====

class ValidationError(BaseAppException):
    """Общая ошибка валидации."""
    def __init__(self, message: str = "Validation error"):
        super().__init__(message)

class ProjectValidationError(ValidationError):
    """Ошибка валидации проекта."""
    def __init__(self, message: str = "Project validation error"):
        super().__init__(message)

class TaskValidationError(ValidationError):
    """Ошибка валидации задачи."""
    def __init__(self, message: str = "Task validation error"):
        super().__init__(message)

class UserValidationError(ValidationError):
    """Ошибка валидации пользователя."""
    def __init__(self, message: str = "User validation error"):
        super().__init__(message)

class TimeEntryValidationError(ValidationError):
    """Ошибка валидации записи учёта времени."""
    def __init__(self, message: str = "Time entry validation error"):
        super().__init__(message)

class ActiveTimeEntryExists(TimeEntryValidationError):
    """У пользователя уже есть незавершённая запись времени."""
    def __init__(self, message: str = "You already have an active time entry. Please stop it before starting a new one."):
        super().__init__(message)

class CustomFieldValidationError(ValidationError):
    """Ошибка валидации кастомного поля или его значения."""
    def __init__(self, message: str = "Custom field validation error"):
        super().__init__(message)

class ClientValidationError(ValidationError):
    """Ошибка валидации клиента или доступа клиента."""
    def __init__(self, message: str = "Client validation error"):
        super().__init__(message)

# ==== NotFound ====

class NotFoundError(BaseAppException):
    """Ошибка отсутствия ресурса (или отсутствия прав — намеренно неразличимо)."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)

class ProjectNotFound(NotFoundError):
    """Ошибка: проект не найден."""
    def __init__(self, message: str = "Project not found"):
        super().__init__(message)

class TaskNotFound(NotFoundError):
    """Ошибка: задача не найдена."""
    def __init__(self, message: str = "Task not found"):
        super().__init__(message)

class UserNotFound(NotFoundError):
    """Ошибка: пользователь не найден."""
    def __init__(self, message: str = "User not found"):
        super().__init__(message)

class MemberNotFound(NotFoundError):
    """Ошибка: пользователь не состоит в проекте."""
    def __init__(self, message: str = "User is not a member of this project"):
        super().__init__(message)

class AssignmentNotFound(NotFoundError):
    """Ошибка: пользователь не назначен на задачу."""
    def __init__(self, message: str = "User is not assigned to this task"):
        super().__init__(message)

class TimeEntryNotFound(NotFoundError):
    """Ошибка: запись времени не найдена."""
    def __init__(self, message: str = "Time entry not found"):
        super().__init__(message)

class CustomFieldNotFound(NotFoundError):
    """Ошибка: кастомное поле или его значение не найдено."""
    def __init__(self, message: str = "Custom field not found"):
        super().__init__(message)

class NotificationNotFound(NotFoundError):
    """Ошибка: уведомление не найдено."""
    def __init__(self, message: str = "Notification not found"):
        super().__init__(message)

class ClientNotFound(NotFoundError):
    """Ошибка: клиент или доступ клиента не найден."""
    def __init__(self, message: str = "Client not found"):
        super().__init__(message)

# ==== Конфликты ====

class ConflictError(BaseAppException):
    """Ошибка: ресурс уже существует."""
    def __init__(self, message: str = "Conflict"):
        super().__init__(message)

class DuplicateAssignment(ConflictError):
    """Ошибка: пользователь уже назначен на задачу."""
    def __init__(self, message: str = "User is already assigned to this task"):
        super().__init__(message)

class DuplicateMember(ConflictError):
    """Ошибка: пользователь уже участник проекта."""
    def __init__(self, message: str = "User is already a member of this project"):
        super().__init__(message)

class DuplicateUser(ConflictError):
    """Ошибка: пользователь с таким username или email уже существует."""
    def __init__(self, message: str = "User with this username or email already exists."):
        super().__init__(message)

# ==== Авторизация ====

class AuthError(BaseAppException):
    """Ошибка аутентификации или авторизации."""
    def __init__(self, message: str = "Authentication or authorization error"):
        super().__init__(message)

class EncryptionError(BaseAppException):
    """Не удалось зашифровать или расшифровать секрет."""
    def __init__(self, message: str = "Failed to decrypt stored secret"):
        super().__init__(message)
