from absl import app

from .inspector import Inspector


def main(args: list[str]) -> None:
  for line in Inspector().run():
    print(line)


def app_run_main() -> None:
  app.run(main)
