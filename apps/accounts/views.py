"""
Account Views - Sign in, sign up and sign out
"""
from django.contrib import messages
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods

from apps.accounts.session import MIN_PASSWORD_LENGTH

MODE_LOGIN = 'login'
MODE_REGISTER = 'register'


@require_http_methods(["GET", "POST"])
def auth_view(request):
    """Combined sign in / sign up page"""
    store = request.session_store
    mode = request.POST.get('mode') or request.GET.get('mode') or MODE_LOGIN
    if mode not in (MODE_LOGIN, MODE_REGISTER):
        mode = MODE_LOGIN

    if request.method == 'GET' and store.is_authenticated:
        return redirect('contracts:dashboard')

    form_data = {'name': '', 'email': ''}

    if request.method == 'POST':
        name = request.POST.get('name', '').strip()
        email = request.POST.get('email', '').strip()
        password = request.POST.get('password', '')
        form_data = {'name': name, 'email': email}

        if mode == MODE_LOGIN:
            if store.sign_in(email, password):
                messages.success(request, 'Login realizado! Redirecionando para o dashboard...')
                next_url = request.GET.get('next')
                if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                    return redirect(next_url)
                return redirect('contracts:dashboard')
            messages.error(request, 'E-mail ou senha incorretos. Verifique suas credenciais.')

        else:
            if len(password) < MIN_PASSWORD_LENGTH:
                messages.error(request, f'A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres.')
            elif store.sign_up(name, email, password):
                messages.success(request, 'Conta criada com sucesso! Faça login para continuar.')
                mode = MODE_LOGIN
                form_data = {'name': '', 'email': email}
            else:
                messages.error(request, 'Erro ao criar conta. Verifique se o e-mail é válido e tente novamente.')

    return render(request, 'accounts/auth.html', {
        'mode': mode,
        'form_data': form_data,
        'min_password_length': MIN_PASSWORD_LENGTH,
    })


@require_http_methods(["POST"])
def logout_view(request):
    request.session_store.sign_out()
    return redirect('contracts:index')
