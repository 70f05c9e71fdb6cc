# pidcore/plot_response.py

import pandas as pd
import matplotlib.pyplot as plt


class ResponsePlotter:
    """
    Строит переходную характеристику контура по DataFrame симулятора.
    Файлы не читает, только рисует переданные данные.
    """

    REQUIRED_COLUMNS = ['time', 'setpoint', 'measurement', 'output']

    def __init__(
        self,
        measurement_color='#00aaff',
        output_color='orangered',
        background_style='darkgrid',
        show_terms=False
    ):
        self.measurement_color = measurement_color
        self.output_color = output_color
        self.background_style = background_style
        self.show_terms = show_terms

    def plot(self, df: pd.DataFrame, save_path=None, show=False, title=None):
        """
        Параметры:
            df (DataFrame): результат simulate().
            save_path (str): куда сохранить PNG; None: не сохранять.
            show (bool): показать окно matplotlib.

        Возвращает:
            dict: {'status': 'OK' или 'ERROR', 'message': str}
        """
        for col in self.REQUIRED_COLUMNS:
            if col not in df.columns:
                return {'status': 'ERROR', 'message': f'Не хватает колонки: {col}'}
        if df.empty:
            return {'status': 'ERROR', 'message': 'Нет данных для графика'}

        try:
            if self.background_style == 'darkgrid':
                plt.style.use('dark_background')
                facecolor = '#121212'
                text_color = 'white'
                grid_color = '#444444'
            else:
                plt.style.use('default')
                facecolor = 'white'
                text_color = 'black'
                grid_color = 'lightgray'

            fig, ax1 = plt.subplots(figsize=(12, 7), facecolor=facecolor)
            time = df['time']

            # === Уставка и измерение ===
            ax1.plot(time, df['measurement'], color=self.measurement_color, linewidth=1.8, label='measurement')
            ax1.plot(time, df['setpoint'], '--', color=text_color, linewidth=1.6, alpha=0.9, label='setpoint')
            ax1.set_xlabel('Время (с)', fontsize=11, color=text_color)
            ax1.set_ylabel('Величина', fontsize=11, color=text_color)
            ax1.grid(True, linestyle='--', alpha=0.3, color=grid_color)

            # === Выход регулятора ===
            ax2 = ax1.twinx()
            ax2.plot(time, df['output'], color=self.output_color, linewidth=1.2, alpha=0.8, label='output')
            if self.show_terms:
                for term in ('p', 'i', 'd'):
                    if term in df.columns:
                        ax2.plot(time, df[term], ':', linewidth=1.0, alpha=0.7, label=term)
            ax2.set_ylabel('Выход ПИД', fontsize=11, color=self.output_color)

            lines1, labels1 = ax1.get_legend_handles_labels()
            lines2, labels2 = ax2.get_legend_handles_labels()
            ax1.legend(lines1 + lines2, labels1 + labels2, loc='upper left', fontsize=9, labelcolor=text_color)

            plt.title(title or 'Переходная характеристика', fontsize=13, color=text_color, pad=15)

            if save_path:
                fig.savefig(save_path, dpi=180, bbox_inches='tight', facecolor=fig.get_facecolor())
                message = f'График сохранён: {save_path}'
            else:
                message = 'График не сохранён.'

            if show:
                plt.show()
            else:
                plt.close(fig)

            return {'status': 'OK', 'message': message}

        except Exception as e:
            return {'status': 'ERROR', 'message': f'Ошибка построения графика: {str(e)}'}
