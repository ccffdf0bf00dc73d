from rich.pretty import pprint

from argmatch import *


parser = (
    ArgParser(shell=True, fancy=True)
    .arg("verbose").short("verbose", "v").long("verbose", "verbose")
    .arg("jobs").short("jobs", "j").takes_value("jobs").validator("jobs", str.isdigit)
    .arg("out").short("out", "o").long("out", "output").takes_value("out")
    .required("out").default("out", "a.out")
    .subcommand(
        "build",
        ArgParser()
        .arg("target").long("target", "target").takes_value("target").required("target"),
        propagate=True,
    )
)


if __name__ == '__main__':
    pprint(parser)
    pprint(parser.parse())
