API = "/api/posts"


def create(client, headers, title, **fields):
    return client.post(API, json={"title": title, **fields}, headers=headers)


def test_create_post_defaults(client, editor_headers):
    response = create(client, editor_headers, "Choosing an Infusion Pump", content="...")
    assert response.status_code == 201

    post = response.json()["data"]
    assert post["slug"] == "choosing-an-infusion-pump"
    assert post["status"] == "published"
    assert post["author"] == "Admin"
    assert post["featured"] is False


def test_drafts_are_hidden_from_public(client, editor_headers):
    create(client, editor_headers, "Published Guide")
    draft = create(client, editor_headers, "Draft Guide", status="draft").json()["data"]

    items = client.get(API).json()["data"]["items"]
    assert [p["title"] for p in items] == ["Published Guide"]
    assert client.get(f"{API}/{draft['slug']}").status_code == 404
    assert client.get(f"{API}/{draft['id']}").status_code == 404


def test_editors_can_list_drafts(client, editor_headers):
    create(client, editor_headers, "Draft Guide", status="draft")

    assert client.get(API, params={"status": "draft"}).status_code == 403

    response = client.get(API, params={"status": "draft"}, headers=editor_headers)
    assert [p["title"] for p in response.json()["data"]["items"]] == ["Draft Guide"]


def test_search_posts(client, editor_headers):
    create(client, editor_headers, "Sterilisation Basics", summary="Autoclave cycles")
    create(client, editor_headers, "Monitor Care")

    items = client.get(API, params={"q": "AUTOCLAVE"}).json()["data"]["items"]
    assert [p["title"] for p in items] == ["Sterilisation Basics"]


def test_retitle_moves_slug(client, editor_headers):
    post = create(client, editor_headers, "Old Title").json()["data"]

    response = client.put(
        f"{API}/{post['id']}", json={"title": "New Title"}, headers=editor_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["slug"] == "new-title"
    assert client.get(f"{API}/old-title").status_code == 404
    assert client.get(f"{API}/new-title").json()["data"]["id"] == post["id"]


def test_same_title_keeps_slug(client, editor_headers):
    post = create(client, editor_headers, "Old Title").json()["data"]

    response = client.put(
        f"{API}/{post['id']}",
        json={"title": "Old Title", "summary": "Updated"},
        headers=editor_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["slug"] == "old-title"
    assert response.json()["data"]["summary"] == "Updated"


def test_duplicate_title_conflicts(client, editor_headers):
    create(client, editor_headers, "Annual Report")

    response = create(client, editor_headers, "ANNUAL report")
    assert response.status_code == 409
    assert response.json()["error"] == "Post with this title already exists"


def test_unpublish_hides_post(client, editor_headers):
    post = create(client, editor_headers, "Recall Notice").json()["data"]

    client.put(f"{API}/{post['id']}", json={"status": "draft"}, headers=editor_headers)
    assert client.get(f"{API}/recall-notice").status_code == 404


def test_delete_post(client, editor_headers):
    post = create(client, editor_headers, "Short Lived").json()["data"]

    assert client.delete(f"{API}/{post['id']}").status_code == 401
    response = client.delete(f"{API}/{post['id']}", headers=editor_headers)
    assert response.json()["data"]["message"] == "Post deleted successfully"
    assert client.get(f"{API}/short-lived").status_code == 404
