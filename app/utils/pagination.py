import math


def paginate(query, page=1, limit=20):
    pagination = query.paginate(page=page, per_page=limit, error_out=False)

    return {
        "items": pagination.items,
        "meta": {
            "total": pagination.total,
            "page": page,
            "limit": limit,
            "totalPages": math.ceil(pagination.total / limit) if limit else 0,
        },
    }


def envelope(items, meta, serializer):
    return {"data": [serializer(i) for i in items], "meta": meta}
