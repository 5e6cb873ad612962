"""Shell integration: wrapper functions that let `wt` change directory."""

from __future__ import annotations

import os

from git_wt.common.errors import ShellFunctionNotConfiguredError
from git_wt.common.validate import validate_shell

# Set by the shell wrapper so the binary knows a cd can happen
SHELL_FUNCTION_ENV = "WT_SHELL_FUNCTION"

_POSIX_WRAPPER = """\
# wt - Git worktree helper
# Shell function: `wt go` and any command with --cd change directory.
# Global options (--repo, -q, -v, --debug) may come before the subcommand.

wt() {{
  export {env_var}=1
  local -a pre
  pre=()
  while (( $# > 0 )); do
    case "$1" in
      --repo)
        pre+=("$1")
        shift
        if (( $# > 0 )); then
          pre+=("$1")
          shift
        fi
        ;;
      --repo=*|-q|--quiet|-v|--verbose|--debug)
        pre+=("$1")
        shift
        ;;
      *)
        break
        ;;
    esac
  done

  if [[ "$1" == "go" ]]; then
    shift
    for arg in "$@"; do
      case "$arg" in
        -h|--help|help|--version)
          command wt "${{pre[@]}}" go "$@"
          return $?
          ;;
      esac
    done

    local out
    out="$(command wt "${{pre[@]}}" go --quiet "$@")"
    local code=$?
    if (( code != 0 )); then
      [[ -n "$out" ]] && printf '%s\\n' "$out"
      return $code
    fi

    if [[ -n "$out" && "$out" != *$'\\n'* && -d "$out" ]]; then
      builtin cd -- "$out" || return 1
    else
      printf '%s\\n' "$out"
    fi
  elif [[ " $* " == *" --cd "* ]]; then
    local out
    out="$(command wt "${{pre[@]}}" "$@")"
    local code=$?
    if (( code != 0 )); then
      [[ -n "$out" ]] && printf '%s\\n' "$out"
      return $code
    fi

    if [[ -n "$out" && "$out" != *$'\\n'* && -d "$out" ]]; then
      builtin cd -- "$out" || return 1
    else
      printf '%s\\n' "$out"
    fi
  else
    command wt "${{pre[@]}}" "$@"
  fi
}}
"""

_BASH_COMPLETION = """
_wt_completion() {
  local cur="${COMP_WORDS[COMP_CWORD]}"
  if [[ $COMP_CWORD -eq 1 ]]; then
    COMPREPLY=($(compgen -W "new go clean open pr tmux config hook" -- "$cur"))
    return
  fi
  if [[ "${COMP_WORDS[1]}" == "go" && $COMP_CWORD -eq 2 ]]; then
    local branches
    branches=$(git worktree list --porcelain 2>/dev/null | sed -n 's|^branch refs/heads/||p')
    COMPREPLY=($(compgen -W "$branches" -- "$cur"))
  fi
}
complete -F _wt_completion wt
"""

_ZSH_COMPLETION = """
_wt() {
  local -a subcmds
  subcmds=(
    'new:Create new worktree'
    'go:Navigate between worktrees'
    'clean:Remove worktrees'
    'open:Open worktree in editor'
    'pr:Create worktree for PR review'
    'tmux:Multi-pane tmux sessions'
    'config:Manage settings'
    'hook:Output shell hook scripts'
  )
  if (( CURRENT == 2 )); then
    _describe 'wt commands' subcmds
  elif (( CURRENT == 3 )) && [[ "${words[2]}" == "go" ]]; then
    local -a branches
    branches=(${(f)"$(git worktree list --porcelain 2>/dev/null | sed -n 's|^branch refs/heads/||p')"})
    _describe 'branches' branches
  fi
}
compdef _wt wt
"""

_FISH_WRAPPER = """\
# wt - Git worktree helper
# Shell function: `wt go` and any command with --cd change directory.
# Global options (--repo, -q, -v, --debug) may come before the subcommand.

function wt
    set -gx {env_var} 1
    set -l pre
    while test (count $argv) -gt 0
        switch $argv[1]
            case --repo
                set pre $pre $argv[1]
                set -e argv[1]
                if test (count $argv) -gt 0
                    set pre $pre $argv[1]
                    set -e argv[1]
                end
            case '--repo=*' -q --quiet -v --verbose --debug
                set pre $pre $argv[1]
                set -e argv[1]
            case '*'
                break
        end
    end

    if test (count $argv) -gt 0; and test "$argv[1]" = go
        for arg in $argv[2..-1]
            switch $arg
                case -h --help help --version
                    command wt $pre $argv
                    return $status
            end
        end

        set -l out (command wt $pre go --quiet $argv[2..-1])
        set -l code $status
        if test $code -ne 0
            test -n "$out"; and printf '%s\\n' $out
            return $code
        end

        if test (count $out) -eq 1; and test -d "$out"
            builtin cd -- $out; or return 1
        else
            printf '%s\\n' $out
        end
    else if contains -- --cd $argv
        set -l out (command wt $pre $argv)
        set -l code $status
        if test $code -ne 0
            test -n "$out"; and printf '%s\\n' $out
            return $code
        end

        if test (count $out) -eq 1; and test -d "$out"
            builtin cd -- $out; or return 1
        else
            printf '%s\\n' $out
        end
    else
        command wt $pre $argv
    end
end

complete -c wt -f -n __fish_use_subcommand -a "new go clean open pr tmux config hook"
"""


def get_shell_hook(shell: str) -> str:
    """Get the wrapper script for a shell (bash, zsh or fish).

    Raises ValidationError for any other shell.
    """
    normalized = validate_shell(shell)
    if normalized == "fish":
        return _FISH_WRAPPER.format(env_var=SHELL_FUNCTION_ENV)

    wrapper = _POSIX_WRAPPER.format(env_var=SHELL_FUNCTION_ENV)
    if normalized == "zsh":
        return wrapper + _ZSH_COMPLETION
    return wrapper + _BASH_COMPLETION


def check_shell_function(cd: bool) -> None:
    """Refuse --cd when the shell wrapper is not installed."""
    if cd and not os.environ.get(SHELL_FUNCTION_ENV):
        raise ShellFunctionNotConfiguredError()
