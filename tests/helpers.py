from collections import deque

SEEDS = range(40)


def reachable_from(rooms, room_id):
    """Breadth-first walk over room links."""
    seen = {room_id}
    queue = deque([room_id])
    while queue:
        room = rooms[queue.popleft()]
        for target in room.links.values():
            if target is not None and target not in seen:
                seen.add(target)
                queue.append(target)
    return seen


def path_to(rooms, start_id, goal_id):
    """Door directions leading from ``start_id`` to ``goal_id``."""
    previous = {start_id: None}
    queue = deque([start_id])
    while queue:
        current = queue.popleft()
        if current == goal_id:
            break
        for direction, target in rooms[current].links.items():
            if target is not None and target not in previous:
                previous[target] = (current, direction)
                queue.append(target)
    steps = []
    node = goal_id
    while previous[node] is not None:
        node, direction = previous[node]
        steps.append(direction)
    return list(reversed(steps))
