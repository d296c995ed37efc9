"""Shell completion scripts for the ``autotyper`` command."""

from typing import Optional

SUPPORTED_SHELLS = ("bash", "zsh", "fish")

BASH_COMPLETION = """\
_autotyper() {
  local cur prev opts
  COMPREPLY=()
  cur="${COMP_WORDS[COMP_CWORD]}"
  prev="${COMP_WORDS[COMP_CWORD-1]}"

  opts="--help -h --version -v --mode --strict --optional-by-default --no-zod --no-interface --no-example --type --zod --interface --outdir --dry-run --config --log-level completion"

  if [[ "${prev}" == "--mode" ]]; then
    COMPREPLY=( $(compgen -W "type interface zod all json" -- "${cur}") )
    return 0
  fi

  if [[ "${prev}" == "--outdir" ]]; then
    COMPREPLY=( $(compgen -d -- "${cur}") )
    return 0
  fi

  if [[ "${prev}" == "--config" ]]; then
    COMPREPLY=( $(compgen -f -- "${cur}") )
    return 0
  fi

  COMPREPLY=( $(compgen -W "${opts}" -- "${cur}") )
  return 0
}
complete -F _autotyper autotyper
"""

ZSH_COMPLETION = """\
#compdef autotyper
_arguments \\
  '--help[Show help]' \\
  '--version[Show version]' \\
  '--mode[Output mode]:mode:(type interface zod all json)' \\
  '--strict[Zod strict mode]' \\
  '--optional-by-default[Optional fields unless !]' \\
  '--no-zod[Disable zod output]' \\
  '--no-interface[Disable interface output]' \\
  '--no-example[Disable example output]' \\
  '--type[Write <outdir>/<name>.type.ts]' \\
  '--zod[Write <outdir>/<name>.zod.ts]' \\
  '--interface[Write <outdir>/<name>.interface.ts]' \\
  '--outdir[Output directory]:dir:_files -/' \\
  '--dry-run[Show what would be written]' \\
  '--config[JSON options file]:file:_files' \\
  '--log-level[Logging level]:level:(debug info warning error critical)' \\
  '1: :_guard "^-*" "dsl or subcommand"' \\
  '*: :_files'
"""

FISH_COMPLETION = """\
complete -c autotyper -l help -s h -d "Show help"
complete -c autotyper -l version -s v -d "Show version"
complete -c autotyper -l mode -d "Output mode" -xa "type interface zod all json"
complete -c autotyper -l strict -d "Zod strict mode"
complete -c autotyper -l optional-by-default -d "Optional fields unless !"
complete -c autotyper -l no-zod -d "Disable zod output"
complete -c autotyper -l no-interface -d "Disable interface output"
complete -c autotyper -l no-example -d "Disable example output"
complete -c autotyper -l type -d "Write <outdir>/<name>.type.ts"
complete -c autotyper -l zod -d "Write <outdir>/<name>.zod.ts"
complete -c autotyper -l interface -d "Write <outdir>/<name>.interface.ts"
complete -c autotyper -l outdir -d "Output directory" -r
complete -c autotyper -l dry-run -d "Show what would be written"
complete -c autotyper -l config -d "JSON options file" -r
complete -c autotyper -l log-level -d "Logging level" -xa "debug info warning error critical"
complete -c autotyper -f -a "completion" -d "Print shell completion"
"""

_SCRIPTS = {
    "bash": BASH_COMPLETION,
    "zsh": ZSH_COMPLETION,
    "fish": FISH_COMPLETION,
}


def get_completion_script(shell: Optional[str]) -> Optional[str]:
    """Return the completion script for ``shell``, or None if unsupported."""
    return _SCRIPTS.get((shell or "").lower())
