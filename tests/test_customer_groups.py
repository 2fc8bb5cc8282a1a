import pytest

from helpers import data_of, error_of, url_prefix


async def make_group(ac_client, headers, store_id, name):
    resp = await ac_client.post(f"{url_prefix}/customer-groups/{store_id}", headers=headers, json={"name": name})
    assert resp.status_code == 201
    return data_of(resp)["group"]


@pytest.mark.asyncio
async def test_customer_group_membership(ac_client, owner):
    headers, store_id = owner
    wholesale = await make_group(ac_client, headers, store_id, "Wholesale")
    assert wholesale["customerCount"] == 0
    await make_group(ac_client, headers, store_id, "VIP")

    customers = f"{url_prefix}/customers/{store_id}"
    for first_name in ("Ngozi", "Tolu"):
        resp = await ac_client.post(customers, headers=headers, json={
            "firstName": first_name, "lastName": "Ade", "customerGroupId": wholesale["id"]})
        assert data_of(resp)["customer"]["customerGroupId"] == wholesale["id"]
    resp = await ac_client.post(customers, headers=headers, json={"firstName": "Walk", "lastName": "In"})
    walk_in = data_of(resp)["customer"]

    resp = await ac_client.get(f"{url_prefix}/customer-groups/{store_id}/{wholesale['id']}", headers=headers)
    assert data_of(resp)["group"]["customerCount"] == 2

    resp = await ac_client.get(customers, headers=headers, params={"customerGroupId": wholesale["id"]})
    assert sorted(c["firstName"] for c in data_of(resp)["items"]) == ["Ngozi", "Tolu"]

    resp = await ac_client.get(f"{url_prefix}/customer-groups/{store_id}/all", headers=headers)
    counts = {g["name"]: g["customerCount"] for g in data_of(resp)["items"]}
    assert counts == {"Wholesale": 2, "VIP": 0}

    resp = await ac_client.put(f"{customers}/{walk_in['id']}", headers=headers, json={"customerGroupId": 999})
    assert resp.status_code == 400
    assert error_of(resp)["message"] == "Customer group does not exist or does not belong to this store"

    resp = await ac_client.get(f"{url_prefix}/customer-groups/{store_id}/export", headers=headers)
    lines = resp.text.strip().splitlines()
    assert lines[0] == "id,name,description,customerCount,createdAt"
    assert any(line.startswith(f"{wholesale['id']},Wholesale,,2,") for line in lines[1:])


@pytest.mark.asyncio
async def test_deleting_group_keeps_customers(ac_client, owner):
    headers, store_id = owner
    group = await make_group(ac_client, headers, store_id, "Wholesale")
    resp = await ac_client.post(f"{url_prefix}/customers/{store_id}", headers=headers, json={
        "firstName": "Ngozi", "lastName": "Ade", "customerGroupId": group["id"]})
    customer_id = data_of(resp)["customer"]["id"]

    resp = await ac_client.put(f"{url_prefix}/customer-groups/{store_id}/{group['id']}", headers=headers,
                               json={"description": "Bulk buyers"})
    assert data_of(resp)["group"]["description"] == "Bulk buyers"
    assert data_of(resp)["group"]["customerCount"] == 1

    resp = await ac_client.delete(f"{url_prefix}/customer-groups/{store_id}/{group['id']}", headers=headers)
    assert resp.status_code == 200

    resp = await ac_client.get(f"{url_prefix}/customers/{store_id}/{customer_id}", headers=headers)
    assert data_of(resp)["customer"]["customerGroupId"] is None


@pytest.mark.asyncio
async def test_customer_group_of_another_store_is_rejected(ac_client, make_store):
    headers_a, store_a = await make_store(email="a@shopmail.com", store_url="store-a")
    headers_b, store_b = await make_store(email="b@shopmail.com", store_url="store-b")
    group = await make_group(ac_client, headers_a, store_a, "Wholesale")

    resp = await ac_client.post(f"{url_prefix}/customers/{store_b}", headers=headers_b, json={
        "firstName": "Ngozi", "lastName": "Ade", "customerGroupId": group["id"]})
    assert resp.status_code == 400
    resp = await ac_client.get(f"{url_prefix}/customer-groups/{store_b}/{group['id']}", headers=headers_b)
    assert resp.status_code == 404
