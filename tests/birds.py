"""Birds, and the food they eat, used as both delegates and interfaces."""


class Food:
    pass


class Bread(Food):
    pass


class Sourdough(Bread):
    pass


class Duck:
    def quack(self) -> str:
        return "quack"

    def swim(self) -> str:
        return "paddles"

    def waddle(self) -> str:
        return "happily waddles"


class Goose:
    def quack(self) -> str:
        return "honk"

    def swim(self) -> str:
        return "glides"

    def eat_bread(self, bread: Bread) -> str:
        return f"eats the {type(bread).__name__.lower()}"
