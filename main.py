import sys

from rich.pretty import pprint

from skiff import App

app = App("calc", "A tiny calculator built with skiff.", "1.0", colorful=True)


def summation(context):
    print(context.integer("a") + context.integer("b", 0))


def greeting(context):
    name = context.string("name", "world")
    message = "hello, %s" % name
    print(message.upper() if context.boolean("loud") else message)


app.command("sum", "Add two integers.") \
    .option("a", "first addend") \
    .option("b", "second addend (defaults to 0)") \
    .run(summation)

app.command("greet", "Say hello.") \
    .option("name", "who to greet") \
    .option("loud") \
    .run(greeting)


if __name__ == '__main__':
    if "--inspect" in sys.argv:
        pprint(app)
    sys.exit(app.main(sys.argv))
