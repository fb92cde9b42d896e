from cFish.models import ContainerRecord


def make_record(**overrides):
    fields = {
        "id": "0123456789abcdef",
        "image": "nginx:latest",
        "command": '"nginx -g daemon off;"',
        "created_at": None,
        "created": "2 hours ago",
        "status": "Up 3 hours",
        "ports": "80/tcp",
        "names": "web1",
    }
    fields.update(overrides)
    return ContainerRecord(**fields)
