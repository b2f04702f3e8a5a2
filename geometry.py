from collections import namedtuple

Box = namedtuple('Box', ['x', 'y', 'width', 'height'])


def clamp(value, lo, hi):
    return max(lo, min(value, hi))


def intersects(ball, paddle):
    """
    Axis-aligned overlap test between two boxes.
    Boxes that only touch along an edge do not intersect.
    """
    return (
        ball.x < paddle.x + paddle.width and
        ball.x + ball.width > paddle.x and
        ball.y < paddle.y + paddle.height and
        ball.y + ball.height > paddle.y
    )
