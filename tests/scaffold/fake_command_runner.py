"""FakeCommandRunner: test double for CommandRunner.

Records every call and imitates the file effects of the generators the
recipe depends on, so commits made after them are not empty.
"""

import os

from kickstart.scaffold.errors import ProcessFailure


class FakeCommandRunner:
    """Test double for CommandRunner.

    Usage:
        fake = FakeCommandRunner(project_dir)
        fake.fail_on("bundle_install")
    """

    def __init__(self, project_dir):
        self.project_dir = project_dir
        self.calls = []
        self._failures = {}

    def fail_on(self, method_name, returncode=1):
        self._failures[method_name] = returncode

    def _record(self, method_name, *args):
        self.calls.append((method_name,) + args)
        if method_name in self._failures:
            raise ProcessFailure([method_name, *args], self._failures[method_name])

    def _write(self, relpath, content):
        path = os.path.join(self.project_dir, relpath)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w") as f:
            f.write(content)

    def spring_stop(self):
        self._record("spring_stop")

    def bundle_install(self):
        self._record("bundle_install")

    def rubocop_autocorrect(self):
        self._record("rubocop_autocorrect")

    def rails_generate(self, *args):
        self._record("rails_generate", *args)
        if args == ("rspec:install",):
            self._write(".rspec", "--require spec_helper\n")
            self._write("spec/spec_helper.rb", "RSpec.configure do |config|\nend\n")

    def rake(self, task):
        self._record("rake", task)
        if task == "hamlit:erb2haml":
            erb = os.path.join(self.project_dir, "app/views/layouts/application.html.erb")
            if os.path.isfile(erb):
                os.remove(erb)
            self._write("app/views/layouts/application.html.haml", "%html= yield\n")

    def names(self):
        return [call[0] for call in self.calls]
