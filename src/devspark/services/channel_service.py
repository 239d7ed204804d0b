"""Channel creation, updates, publishing and deletion."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from devspark.core.permissions import MANAGE_CHANNELS
from devspark.db.session import utcnow
from devspark.models import Channel, Post, Visibility
from devspark.repositories.base import DeletePredicate, Repository
from devspark.services.cascade import CascadeCoordinator
from devspark.services.errors import ValidationError
from devspark.services.guards import refuse_delete, require_mutable, require_visible
from devspark.services.identity import Actor
from devspark.services.tag_service import ensure_tags_exist


def get_visible_channel(db: Session, actor: Actor | None, channel_id: str) -> Channel:
    """Return a channel the actor may see.

    Raises:
        NotFoundError: If the channel does not exist or is hidden.
    """
    return require_visible(actor, Repository(db, Channel).get(channel_id), "Channel")


def get_managed_channel(db: Session, actor: Actor, channel_id: str) -> Channel:
    """Return a channel the actor may see and manage.

    Raises:
        NotFoundError: If the channel does not exist or is hidden.
        ForbiddenError: If the actor neither owns it nor manages channels.
    """
    channel = get_visible_channel(db, actor, channel_id)
    require_mutable(actor, channel, "Channel", elevated=MANAGE_CHANNELS)
    return channel


def create_channel(
    db: Session,
    actor: Actor,
    name: str,
    visibility: Visibility | None = None,
) -> Channel:
    channel = Channel(
        owner_id=actor.id,
        name=name,
        visibility=visibility or Visibility.PUBLIC,
    )
    Repository(db, Channel).put(channel)
    db.commit()
    db.refresh(channel)
    return channel


def update_channel(
    db: Session,
    actor: Actor,
    channel_id: str,
    name: str | None = None,
    visibility: Visibility | None = None,
) -> Channel:
    """Rename a channel and/or change its visibility.

    Raises:
        ValidationError: If neither a name nor a visibility is supplied.
    """
    if name is None and visibility is None:
        raise ValidationError("Nothing to update")
    channel = get_managed_channel(db, actor, channel_id)
    values: dict[str, object] = {"updated_at": utcnow()}
    if name is not None:
        values["name"] = name
    if visibility is not None:
        values["visibility"] = visibility
    Repository(db, Channel).update(channel.id, values)
    db.commit()
    db.refresh(channel)
    return channel


def publish_post(
    db: Session,
    actor: Actor,
    channel_id: str,
    title: str,
    text: str,
    tag_ids: Iterable[str] = (),
    visibility: Visibility | None = None,
) -> Post:
    """Create a post in a channel the actor manages.

    Without an explicit visibility the post inherits the channel's.

    Raises:
        ReferentialError: If any tag id does not exist; nothing is stored.
    """
    channel = get_managed_channel(db, actor, channel_id)
    wanted_tags = ensure_tags_exist(db, tag_ids)
    post = Post(
        owner_id=actor.id,
        channel_id=channel.id,
        title=title,
        text=text,
        visibility=visibility or channel.visibility,
    )
    post.set_tag_ids(wanted_tags)
    Repository(db, Post).put(post)
    db.commit()
    db.refresh(post)
    return post


def remove_channel(db: Session, actor: Actor, channel_id: str) -> None:
    """Delete a channel with its posts and their comments.

    Holders of the channel-management permission delete by id; everybody
    else deletes by id and ownership in one predicate.

    Raises:
        NotFoundError: If no such channel is visible to the actor.
        ForbiddenError: If the channel is visible but not the actor's.
        CascadeFailure: If cleaning up the posts failed.
    """
    if actor.has_permission(MANAGE_CHANNELS):
        predicate = DeletePredicate.by_id(channel_id)
    else:
        predicate = DeletePredicate.by_id_and_owner(channel_id, actor.id)
    if CascadeCoordinator.for_session(db).delete_channel(predicate):
        return
    refuse_delete(actor, Repository(db, Channel).get(channel_id), "Channel")
