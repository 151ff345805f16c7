from sqlalchemy.orm import Session
import logging
from typing import List, Optional

from learnhub.models.discussion_model import Discussion, Reply
from learnhub.schemas import discussion_schema as schemas

logger = logging.getLogger(__name__)

def create_discussion(db: Session, discussion_in: schemas.DiscussionCreate, course_id: int, user_id: int) -> Discussion:
    logger.debug(f"Creating discussion '{discussion_in.title}' in course_id {course_id} by user_id {user_id}")
    db_discussion = Discussion(**discussion_in.model_dump(), course_id=course_id, user_id=user_id)
    db.add(db_discussion)
    db.commit()
    db.refresh(db_discussion)
    logger.info(f"Discussion ID {db_discussion.id} created in course {course_id}.")
    return db_discussion

def get_discussion(db: Session, discussion_id: int) -> Optional[Discussion]:
    logger.debug(f"Fetching discussion with ID: {discussion_id}")
    return db.query(Discussion).filter(Discussion.id == discussion_id).first()

def get_course_discussions(db: Session, course_id: int) -> List[Discussion]:
    logger.debug(f"Fetching discussions for course_id {course_id}")
    return db.query(Discussion).filter(Discussion.course_id == course_id).order_by(Discussion.id.desc()).all()

def create_reply(db: Session, reply_in: schemas.ReplyCreate, discussion_id: int, user_id: int) -> Reply:
    logger.debug(f"Creating reply on discussion_id {discussion_id} by user_id {user_id}")
    db_reply = Reply(content=reply_in.content, discussion_id=discussion_id, user_id=user_id)
    db.add(db_reply)
    db.commit()
    db.refresh(db_reply)
    logger.info(f"Reply ID {db_reply.id} added to discussion {discussion_id}.")
    return db_reply

def get_discussion_replies(db: Session, discussion_id: int) -> List[Reply]:
    logger.debug(f"Fetching replies for discussion_id {discussion_id}")
    return db.query(Reply).filter(Reply.discussion_id == discussion_id).order_by(Reply.id).all()
