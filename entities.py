from tile_map import ghost_can_enter, player_can_enter


def circles_overlap(ax, ay, ar, bx, by, br):
    dx = ax - bx
    dy = ay - by
    reach = ar + br
    return dx * dx + dy * dy <= reach * reach


def random_horizontal_dir(rng):
    return (rng.choice((-1, 1)), 0)


def random_axis_dir(rng):
    if rng.randint(0, 1) == 0:
        return (rng.choice((-1, 1)), 0)
    return (0, rng.choice((-1, 1)))


def target_cell(x, y, d, speed, tile):
    nx = x + d[0] * speed
    ny = y + d[1] * speed
    return nx, ny, int(nx // tile), int(ny // tile)


class Player:
    def __init__(self, x, y, speed, radius):
        self.x = x
        self.y = y
        self.start = (x, y)
        self.dir = (1, 0)
        self.speed = speed
        self.radius = radius
        self.powered_up = False
        self.power_timer = 0

    def update(self, env, desired_dir):
        """Advance one frame; returns the entered cell or None if blocked."""
        if desired_dir != (0, 0):
            self.dir = desired_dir
        nx, ny, tx, ty = target_cell(self.x, self.y, self.dir, self.speed, env.tile)
        if not env.tile_map.in_bounds(tx, ty):
            return None
        if not player_can_enter(env.tile_map.get(tx, ty), self.powered_up):
            return None
        self.x, self.y = nx, ny
        return tx, ty

    def to_dict(self):
        return {
            "x": self.x,
            "y": self.y,
            "dir": self.dir,
            "speed": self.speed,
            "radius": self.radius,
            "powered_up": self.powered_up,
            "power_timer": self.power_timer,
        }


class Ghost:
    def __init__(self, x, y, speed, radius, sprite_index, rng):
        self.x = x
        self.y = y
        self.start = (x, y)
        self.dir = random_horizontal_dir(rng)
        self.speed = speed
        self.radius = radius
        self.sprite_index = sprite_index
        self.vulnerable = False
        self.flattened = False

    def update(self, env):
        nx, ny, tx, ty = target_cell(self.x, self.y, self.dir, self.speed, env.tile)
        if env.tile_map.in_bounds(tx, ty) and ghost_can_enter(env.tile_map.get(tx, ty)):
            self.x, self.y = nx, ny
            return True
        self.dir = random_axis_dir(env.rng)
        return False

    def send_home(self):
        self.x, self.y = self.start
        self.vulnerable = False
        self.flattened = False

    def to_dict(self):
        return {
            "x": self.x,
            "y": self.y,
            "dir": self.dir,
            "speed": self.speed,
            "radius": self.radius,
            "vulnerable": self.vulnerable,
            "flattened": self.flattened,
            "sprite_index": self.sprite_index,
        }
