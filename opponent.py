"""
Rule-based opponent that follows the ball.
Moves a fixed step per tick toward the ball, so it can be beaten by a ball
that travels faster than it does.
"""


class TrackingPolicy:
    """
    Step controller centring a paddle on the ball.
    Works for either side, so the same policy can play the player paddle in
    autoplay mode.
    """
    def __init__(self, speed):
        self.speed = speed

    def target(self, paddle, ball):
        return ball.y - (paddle.height - ball.size) / 2

    def move(self, paddle, ball):
        target = self.target(paddle, ball)
        if paddle.y < target:
            paddle.move(self.speed)
        elif paddle.y > target:
            paddle.move(-self.speed)
        # Exactly on target: stay put
