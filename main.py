from rich.pretty import pprint

from cflag import *


def handler(c):
    pprint({
        "age": c.lookup("age").value.get(),
        "name": c.lookup("name").value.get(),
        "debug": c.lookup("debug").value.get(),
        "image": c.arg("image").string(),
        "tag": c.arg("tag").string(),
        "remain": c.remain_args,
    })


cmd = CFlags(
    desc="this is a demo command",
    version="0.1.0",
    example="{{cmd}} --age 23 -n inhere alpine 3.18",
    func=handler,
)
cmd.int("age", 0, "your age;true;a")
cmd.string("name", "", "your `name`;false;n")
cmd.bool("debug", False, "turn on debug output;;d")
cmd.add_validator("age", lambda age: None if 0 < age < 150 else "must be between 1 and 149")
cmd.add_arg("image", "image to run", True)
cmd.add_arg("tag", "image tag", False, "latest")


if __name__ == '__main__':
    cmd.must_parse()
