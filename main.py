import logging

from rich.logging import RichHandler
from rich.pretty import pprint

from replines import *

logging.basicConfig(level=logging.INFO, format="%(message)s", handlers=[RichHandler()])

registry = install_defaults(Registry(warn_duplicates=True))


class Deploy:
    target = Cardinal(str)
    port = Option("-p", "--port", kind=int, default=8080)
    dry = Flag("-n", "--dry-run")


@registry.command("deploy", descr="deploys a target", shape=Deploy)
def deploy(runner, deploy):
    runner.println("[green]deploying[/green] %s on port %d%s" % (deploy.target, deploy.port, " (dry run)" if deploy.dry else ""))


@registry.command("sum", descr="adds integers in the background", asynchronous=True)
def total(runner, arguments):
    return sum(arguments.next(int) for _ in range(len(arguments) - arguments.index))


if __name__ == '__main__':
    pprint(registry)
    with Runner(registry, filters=(colorize,)) as runner:
        runner.start()
