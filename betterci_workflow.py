# betterci_workflow.py
# Example workflow using the hello-world step from both DSL forms
from __future__ import annotations

from betterci_hello.dsl import wf, job, hello_world, step


def workflow():
    return wf(
        # Symbol form: helloWorld 'New name'
        job(
            "greet-symbol",
            hello_world("New name"),
        ),

        # Class-reference form: step([$class: 'HelloWorldBuilder', name: '...'])
        job(
            "greet-class",
            step({"$class": "HelloWorldBuilder", "name": "New name"}),
        ),
    )
