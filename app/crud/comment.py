#app/crud/comment.py
import logging
from typing import List
from sqlalchemy.orm import Session
from app.models.comment import Comment, Mention
from app.models.task import Task
from app.models.user import User
from app.models.notification import NotificationType
from app.crud.notification import add_notification
from app.core.exceptions import ValidationError

logger = logging.getLogger("Taskboard.Comments")

def get_comments(db: Session, task_id: int) -> List[Comment]:
    return db.query(Comment).filter(Comment.task_id == task_id).order_by(Comment.created_at, Comment.id).all()

def create_comment(db: Session, task: Task, author_id: int, data: dict) -> Comment:
    """
    Добавить комментарий к задаче.

    Исполнители и автор задачи получают COMMENT_ADDED, упомянутые — MENTIONED.
    Автор комментария уведомлений о своём комментарии не получает.
    """
    content = (data.get("content") or "").strip()
    if not content:
        raise ValidationError("Comment content is required.")

    mention_ids = list(dict.fromkeys(data.get("mentions") or []))
    if mention_ids:
        found = {row[0] for row in db.query(User.id).filter(User.id.in_(mention_ids)).all()}
        missing = [i for i in mention_ids if i not in found]
        if missing:
            raise ValidationError(f"Unknown mentioned user ids: {missing}")

    comment = Comment(task_id=task.id, author_id=author_id, content=content)
    comment.mentions = [Mention(user_id=user_id) for user_id in mention_ids]
    db.add(comment)
    db.flush()

    watchers = [a.user_id for a in task.assignments]
    watchers.append(task.creator_id)
    for user_id in dict.fromkeys(watchers):
        if user_id == author_id:
            continue
        add_notification(
            db,
            recipient_id=user_id,
            type=NotificationType.COMMENT_ADDED.value,
            content=f'New comment on task "{task.title}"',
            related_item_id=task.id,
            related_item_type="task",
        )
    for user_id in mention_ids:
        if user_id == author_id:
            continue
        add_notification(
            db,
            recipient_id=user_id,
            type=NotificationType.MENTIONED.value,
            content=f'You were mentioned in a comment on task "{task.title}"',
            related_item_id=task.id,
            related_item_type="task",
        )
    db.commit()
    logger.info(f"User {author_id} commented on task {task.id} (comment {comment.id})")
    return comment
