# mypy: ignore-errors
# tests/v1/test_channels.py
"""Tests for channel-related endpoints."""

from fastapi import status

from devspark.models import Comment, Post, Visibility


def test_create_channel(client, owner, owner_headers) -> None:
    """Test creating a channel owned by the caller."""
    response = client.post(
        "/api/v1/channels/",
        json={"name": "general"},
        headers=owner_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["owner_id"] == owner.id
    assert data["visibility"] == "public"


def test_create_channel_requires_auth(client) -> None:
    """Test that anonymous callers cannot create channels."""
    response = client.post("/api/v1/channels/", json={"name": "general"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_banned_user_cannot_create_channel(client, banned_viewer, headers_for) -> None:
    """Test that banned users are refused before anything is written."""
    response = client.post(
        "/api/v1/channels/",
        json={"name": "general"},
        headers=headers_for(banned_viewer),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_private_channel_reads_as_missing(client, private_channel, stranger_headers) -> None:
    """Test that a private channel is not found for non-owners."""
    anonymous = client.get(f"/api/v1/channels/{private_channel.id}")
    stranger = client.get(f"/api/v1/channels/{private_channel.id}", headers=stranger_headers)
    assert anonymous.status_code == status.HTTP_404_NOT_FOUND
    assert stranger.status_code == status.HTTP_404_NOT_FOUND


def test_owner_reads_private_channel(client, private_channel, owner_headers) -> None:
    response = client.get(f"/api/v1/channels/{private_channel.id}", headers=owner_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Private Channel"


def test_viewer_reads_private_channel(client, private_channel, viewer, headers_for) -> None:
    response = client.get(f"/api/v1/channels/{private_channel.id}", headers=headers_for(viewer))
    assert response.status_code == status.HTTP_200_OK


def test_find_channels_by_pattern(client, make_channel, owner) -> None:
    """Test pattern search over channel names."""
    make_channel(owner, name="python-news")
    make_channel(owner, name="python-jobs")
    make_channel(owner, name="rust-news")

    response = client.get("/api/v1/channels/", params={"pattern": "^python"})

    assert response.status_code == status.HTTP_200_OK
    assert {item["name"] for item in response.json()} == {"python-news", "python-jobs"}


def test_find_channels_invalid_pattern(client) -> None:
    response = client.get("/api/v1/channels/", params={"pattern": "(oops"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_channel(client, public_channel, owner_headers) -> None:
    """Test renaming a channel and making it private."""
    response = client.patch(
        f"/api/v1/channels/{public_channel.id}",
        json={"name": "renamed", "visibility": "private"},
        headers=owner_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "renamed"
    assert data["visibility"] == "private"


def test_update_channel_without_fields(client, public_channel, owner_headers) -> None:
    response = client.patch(
        f"/api/v1/channels/{public_channel.id}",
        json={},
        headers=owner_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_foreign_channel_forbidden(client, public_channel, stranger_headers) -> None:
    response = client.patch(
        f"/api/v1/channels/{public_channel.id}",
        json={"name": "hijacked"},
        headers=stranger_headers,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_delete_channel_cascades(
    client, public_channel, make_post, make_comment, owner, owner_headers, count_rows
) -> None:
    """Test deleting a channel removes its posts and their comments."""
    first = make_post(public_channel)
    second = make_post(public_channel)
    make_comment(first, owner)
    make_comment(second, owner)

    response = client.delete(f"/api/v1/channels/{public_channel.id}", headers=owner_headers)

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert count_rows(Post, Post.channel_id == public_channel.id) == 0
    assert count_rows(Comment, Comment.post_id.in_([first.id, second.id])) == 0


def test_delete_channel_twice(client, public_channel, owner_headers) -> None:
    """Test that deleting an already deleted channel is not found."""
    url = f"/api/v1/channels/{public_channel.id}"
    assert client.delete(url, headers=owner_headers).status_code == status.HTTP_204_NO_CONTENT
    assert client.delete(url, headers=owner_headers).status_code == status.HTTP_404_NOT_FOUND
    assert client.delete(url, headers=owner_headers).status_code == status.HTTP_404_NOT_FOUND


def test_delete_foreign_channel_forbidden(
    client, public_channel, make_post, stranger_headers, count_rows
) -> None:
    make_post(public_channel)
    response = client.delete(f"/api/v1/channels/{public_channel.id}", headers=stranger_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert count_rows(Post, Post.channel_id == public_channel.id) == 1


def test_admin_deletes_foreign_channel(client, public_channel, admin_headers) -> None:
    response = client.delete(f"/api/v1/channels/{public_channel.id}", headers=admin_headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT


def test_publish_post_inherits_channel_visibility(
    client, private_channel, make_tag, owner_headers
) -> None:
    """Test that a post without an explicit visibility takes the channel's."""
    tag = make_tag("news")
    response = client.post(
        f"/api/v1/channels/{private_channel.id}/posts",
        json={"title": "Hello", "text": "World", "tag_ids": [tag.id]},
        headers=owner_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["visibility"] == "private"
    assert data["tag_ids"] == [tag.id]
    assert data["score"] == 0


def test_publish_post_unknown_tag_conflicts(
    client, public_channel, make_tag, owner_headers, count_rows
) -> None:
    """Test that one unknown tag id fails the publish and stores nothing."""
    tag = make_tag()
    response = client.post(
        f"/api/v1/channels/{public_channel.id}/posts",
        json={"title": "Hello", "text": "World", "tag_ids": [tag.id, "missing"]},
        headers=owner_headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert count_rows(Post) == 0


def test_publish_into_foreign_channel_forbidden(client, public_channel, stranger_headers) -> None:
    response = client.post(
        f"/api/v1/channels/{public_channel.id}/posts",
        json={"title": "Hello", "text": "World"},
        headers=stranger_headers,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_list_channel_posts(client, public_channel, make_post, stranger, owner_headers) -> None:
    """Test that the channel owner sees private posts others published there."""
    make_post(public_channel, title="open")
    make_post(public_channel, title="guest", visibility=Visibility.PRIVATE, owner_id=stranger.id)

    anonymous = client.get(f"/api/v1/channels/{public_channel.id}/posts")
    as_owner = client.get(f"/api/v1/channels/{public_channel.id}/posts", headers=owner_headers)

    assert [item["title"] for item in anonymous.json()] == ["open"]
    assert {item["title"] for item in as_owner.json()} == {"open", "guest"}


def test_list_posts_of_hidden_channel(client, private_channel) -> None:
    response = client.get(f"/api/v1/channels/{private_channel.id}/posts")
    assert response.status_code == status.HTTP_404_NOT_FOUND
