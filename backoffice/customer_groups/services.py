from typing import Dict, List, Optional

from sqlalchemy import delete, func, or_, select, update

from backoffice.common.custom_exceptions import BadRequestError, NotFoundError
from backoffice.common.logging_setup import get_logger
from backoffice.common.utils import now
from backoffice.customer_groups.models import CustomerGroupCreateIn, CustomerGroupOut, CustomerGroupUpdateIn
from backoffice.schema.full_schema import Customer, CustomerGroup

logger = get_logger("backoffice.customer_groups")

EXPORT_FIELDS = ("id", "name", "description", "customerCount", "createdAt")


def _clean_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise BadRequestError("Customer group name is required")
    return name


async def member_counts(session, group_ids: List[int]) -> Dict[int, int]:
    if not group_ids:
        return {}
    stmt = (select(Customer.customer_group_id, func.count(Customer.id))
            .where(Customer.customer_group_id.in_(group_ids))
            .group_by(Customer.customer_group_id))
    return dict((await session.execute(stmt)).all())


async def groups_out(session, groups) -> list:
    counts = await member_counts(session, [g.id for g in groups])
    return [
        CustomerGroupOut.model_validate(g).model_copy(update={"customer_count": counts.get(g.id, 0)})
        .model_dump(by_alias=True, mode="json")
        for g in groups
    ]


async def group_out(session, group: CustomerGroup) -> dict:
    return (await groups_out(session, [group]))[0]


async def ensure_group_in_store(session, store_id: int, group_id: Optional[int]) -> None:
    if group_id is None:
        return
    found = (await session.execute(select(CustomerGroup.id).where(
        CustomerGroup.id == group_id, CustomerGroup.store_id == store_id))).scalar_one_or_none()
    if found is None:
        raise BadRequestError("Customer group does not exist or does not belong to this store")


async def create_group(session, store_id: int, payload: CustomerGroupCreateIn) -> CustomerGroup:
    group = CustomerGroup(store_id=store_id, name=_clean_name(payload.name), description=payload.description)
    session.add(group)
    await session.commit()
    logger.info("customer_group.created", extra={"store_id": store_id, "group_id": group.id})
    return group


async def get_group(session, store_id: int, group_id: int) -> CustomerGroup:
    group = await session.get(CustomerGroup, group_id)
    if group is None or group.store_id != store_id:
        raise NotFoundError("Customer group not found")
    return group


def _filters(store_id: int, search: Optional[str]) -> list:
    filters = [CustomerGroup.store_id == store_id]
    if search and search.strip():
        term = f"%{search.strip()}%"
        filters.append(or_(CustomerGroup.name.ilike(term), CustomerGroup.description.ilike(term)))
    return filters


async def list_groups(session, store_id: int, search: Optional[str], page: int, page_size: int):
    filters = _filters(store_id, search)
    total = (await session.execute(select(func.count(CustomerGroup.id)).where(*filters))).scalar_one()
    stmt = (select(CustomerGroup).where(*filters)
            .order_by(CustomerGroup.created_at.desc(), CustomerGroup.id.desc())
            .offset((page - 1) * page_size).limit(page_size))
    return (await session.execute(stmt)).scalars().all(), total


async def list_all_groups(session, store_id: int):
    stmt = (select(CustomerGroup).where(CustomerGroup.store_id == store_id)
            .order_by(CustomerGroup.created_at.desc(), CustomerGroup.id.desc()))
    return (await session.execute(stmt)).scalars().all()


async def update_group(session, store_id: int, group_id: int, payload: CustomerGroupUpdateIn) -> CustomerGroup:
    group = await get_group(session, store_id, group_id)
    updates = payload.model_dump(exclude_unset=True)
    if "name" in updates:
        updates["name"] = _clean_name(updates["name"])
    for field, value in updates.items():
        setattr(group, field, value)
    group.updated_at = now()
    await session.commit()
    return group


async def delete_group(session, store_id: int, group_id: int) -> None:
    """Members stay; they just lose the group."""
    group = await get_group(session, store_id, group_id)
    await session.execute(update(Customer).where(Customer.customer_group_id == group.id)
                          .values(customer_group_id=None))
    await session.execute(delete(CustomerGroup).where(CustomerGroup.id == group.id))
    await session.commit()
    logger.info("customer_group.deleted", extra={"store_id": store_id, "group_id": group_id})


async def export_rows(session, store_id: int) -> list:
    groups = await list_all_groups(session, store_id)
    counts = await member_counts(session, [g.id for g in groups])
    return [
        {"id": g.id, "name": g.name, "description": g.description, "customerCount": counts.get(g.id, 0),
         "createdAt": g.created_at}
        for g in groups
    ]
